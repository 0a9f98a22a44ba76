"""
Sugestões de nomes por distância de edição.

Usado apenas para compor a lista "Did you mean?" de `UnknownEntryError`.
"""

from __future__ import annotations

from typing import Iterable, List


def edit_distance(a: str, b: str) -> int:
    """Distância de Levenshtein entre `a` e `b`."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def closest(name: str, candidates: Iterable[str]) -> List[str]:
    """
    Retorna os candidatos com a menor distância de edição até `name`.

    A ordem dos candidatos é preservada e nomes repetidos aparecem uma vez.
    Lista vazia quando não há candidatos.
    """
    unique: List[str] = []
    for c in candidates:
        if c is not None and c not in unique:
            unique.append(c)
    if not unique:
        return []

    distances = [edit_distance(name, c) for c in unique]
    best = min(distances)
    return [c for c, d in zip(unique, distances) if d == best]
