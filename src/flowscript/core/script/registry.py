# src/flowscript/core/script/registry.py
"""
Registro de componentes declarados por um script.

Este módulo define o `ComponentRegistry`, responsável por registrar
workflows e processos à medida que o script é avaliado e por responder
consultas por nome (do driver de entry point ou de um script que inclui
este como módulo).

Responsabilidades do módulo:
    - Validar unicidade de nomes de componentes
    - Preservar a ordem de registro
    - Manter o workflow anônimo candidato a entry point

Decisões arquiteturais:
    - Colisão de nomes é falha fatal de configuração do script
    - Apenas workflows podem ser anônimos
    - O primeiro workflow anônimo registrado é o candidato a entry point

Invariantes:
    - Cada nome registrado é único no registry
    - `list()` reflete exatamente a ordem de registro (anônimos incluídos)

Limites explícitos:
    - Não executa componentes
    - Não seleciona entry point por nome (ver driver)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flowscript.core.exceptions import DuplicateNameError

from .definition import ComponentDefinition


@dataclass
class ComponentRegistry:
    """
    Registro canônico de componentes de um script.

    A estrutura interna não é exposta diretamente; o acesso se dá por
    `get`, `has`, `list` e `names`.
    """

    _by_name: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _order: List[Any] = field(default_factory=list, init=False, repr=False)
    _anonymous: List[ComponentDefinition] = field(default_factory=list, init=False, repr=False)

    def add(self, definition: Any) -> None:
        name = getattr(definition, "name", None)

        if name is None:
            if not isinstance(definition, ComponentDefinition):
                raise ValueError("only workflows may be declared without a name")
            self._anonymous.append(definition)
            self._order.append(definition)
            return

        if not isinstance(name, str) or not name.strip():
            raise ValueError("component name must be a non-empty string")

        if name in self._by_name:
            raise DuplicateNameError.for_name(name, kind=getattr(definition, "type", "component"))

        self._by_name[name] = definition
        self._order.append(definition)

    def get(self, name: str) -> Any:
        return self._by_name[name]

    def has(self, name: str) -> bool:
        return name in self._by_name

    def list(self) -> List[Any]:
        return list(self._order)

    def names(self, kind: Optional[str] = None) -> List[str]:
        return [
            d.name for d in self._order
            if d.name is not None and (kind is None or d.type == kind)
        ]

    def workflow_names(self) -> List[str]:
        return self.names("workflow")

    def entry_candidate(self) -> Optional[ComponentDefinition]:
        return self._anonymous[0] if self._anonymous else None

    def anonymous_count(self) -> int:
        return len(self._anonymous)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._order)
