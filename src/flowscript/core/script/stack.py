# src/flowscript/core/script/stack.py
"""
Pilha de execução da sessão.

Cada invocação empilha um frame (o componente em execução) na entrada e
o desempilha na saída, com sucesso ou falha. O script em si é o frame da
base enquanto o seu nível superior é avaliado.

A pilha pertence à `Session` (não é global do processo) e é acessada via
`frame()`, que garante o pop em qualquer caminho de saída.

Invariantes:
    - Após `with stack.frame(x)` a profundidade volta ao valor anterior
    - `current()` reflete sempre o frame mais recente
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from .definition import ComponentDefinition


class ExecutionStack:
    def __init__(self) -> None:
        self._frames: List[Any] = []

    def push(self, context: Any) -> None:
        self._frames.append(context)

    def pop(self) -> Any:
        if not self._frames:
            raise RuntimeError("Execution stack is empty")
        return self._frames.pop()

    @contextmanager
    def frame(self, context: Any) -> Iterator[Any]:
        self.push(context)
        try:
            yield context
        finally:
            self.pop()

    def current(self) -> Optional[Any]:
        return self._frames[-1] if self._frames else None

    def current_workflow(self) -> Optional[ComponentDefinition]:
        """Workflow em execução mais recente (ignora scripts e processos)."""
        for context in reversed(self._frames):
            if isinstance(context, ComponentDefinition):
                return context
        return None

    def depth(self) -> int:
        return len(self._frames)

    def frames(self) -> List[Any]:
        return list(self._frames)

    def is_empty(self) -> bool:
        return not self._frames
