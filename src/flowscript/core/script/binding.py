# src/flowscript/core/script/binding.py
"""
Ambientes de variáveis do script e das invocações.

Este módulo define os dois níveis de escopo usados durante a avaliação
de um script:

    - ScriptBinding    → variáveis globais do script + metadados de execução
                          (entry name, carregamento como módulo)
    - ExecutionBinding → variáveis locais de UMA invocação de workflow

Princípios fundamentais:
    - Cada invocação recebe um ExecutionBinding novo (nunca reutilizado)
    - Leituras caem para o ScriptBinding quando a variável não é local
    - Escritas são sempre locais à invocação

Invariantes:
    - Duas invocações (mesmo recursivas) nunca enxergam locais uma da outra
    - O ScriptBinding nunca é alterado por escritas de uma invocação

Limites explícitos:
    - Não executa corpos de workflow
    - Não conhece canais nem o engine
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional


class ScriptBinding:
    """
    Escopo global de um script.

    Além das variáveis globais (ex.: `params`, `session`), carrega as
    duas decisões de execução vindas da configuração da sessão:
    o nome explícito do entry workflow e se o script é um módulo.
    """

    def __init__(
        self,
        variables: Optional[Dict[str, Any]] = None,
        *,
        entry_name: Optional[str] = None,
        module: bool = False,
    ):
        self._variables: Dict[str, Any] = dict(variables or {})
        self.entry_name = entry_name
        self.module = module

    def has_variable(self, name: str) -> bool:
        return name in self._variables

    def get_variable(self, name: str) -> Any:
        if name not in self._variables:
            raise KeyError(name)
        return self._variables[name]

    def set_variable(self, name: str, value: Any) -> None:
        self._variables[name] = value

    def variable_names(self) -> List[str]:
        return list(self._variables.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __getitem__(self, name: str) -> Any:
        return self.get_variable(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set_variable(name, value)


class ExecutionBinding:
    """
    Escopo isolado de uma invocação de workflow.

    Encadeado (não mesclado) ao ScriptBinding do script dono do workflow.
    """

    def __init__(self, parent: Optional[ScriptBinding] = None):
        self._parent = parent if parent is not None else ScriptBinding()
        self._locals: Dict[str, Any] = {}

    @property
    def parent(self) -> ScriptBinding:
        return self._parent

    def has_variable(self, name: str) -> bool:
        return name in self._locals or self._parent.has_variable(name)

    def has_local(self, name: str) -> bool:
        return name in self._locals

    def get_variable(self, name: str) -> Any:
        if name in self._locals:
            return self._locals[name]
        if self._parent.has_variable(name):
            return self._parent.get_variable(name)
        raise KeyError(name)

    def set_variable(self, name: str, value: Any) -> None:
        self._locals[name] = value

    def local_names(self) -> List[str]:
        return list(self._locals.keys())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_variable(name)

    def __getitem__(self, name: str) -> Any:
        return self.get_variable(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set_variable(name, value)

    def __iter__(self) -> Iterator[str]:
        return iter(self.local_names())
