# src/flowscript/core/script/script.py
"""
Contexto de avaliação de um script.

O `ScriptContext` é o ponto de entrada usado pelo nível superior de um
script (a função `main(script)`) para declarar processos e workflows,
incluir componentes de outros scripts e invocar componentes.

Todas as declarações são delegadas à estratégia de execução da sessão;
a avaliação completa (nível superior + entry point) é delegada ao
`ScriptDriver`.

Exemplo:

    def main(script):
        @script.workflow(take=["x", "y"], emit=["z"])
        def add(b):
            b["z"] = b["x"] + b["y"]

        @script.workflow()
        def entry(b):
            b["out"] = script.invoke("add", 1, 2)

    ScriptContext(Session(), main=main).run()
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from flowscript.core.engine.driver import ScriptDriver
from flowscript.core.exceptions import UnknownComponentError
from flowscript.core.util.closest import closest

from .binding import ScriptBinding
from .definition import ComponentDefinition, WorkflowBlock
from .registry import ComponentRegistry


class ScriptContext:
    def __init__(
        self,
        session: Any,
        *,
        name: str = "main",
        main: Optional[Callable[["ScriptContext"], Any]] = None,
        variables: Optional[Dict[str, Any]] = None,
    ):
        self.session = session
        self.name = name
        self._main = main
        self.binding = ScriptBinding(
            variables,
            entry_name=session.entry_name,
            module=session.is_module,
        )
        self.registry = ComponentRegistry()
        self.last_processor: Any = None
        self.loaded = False

    def setup(self) -> None:
        self.binding.set_variable("session", self.session)
        if not self.binding.has_variable("params"):
            self.binding.set_variable("params", self.session.params)

    # -----------------------------
    # Declarações
    # -----------------------------
    def process(self, name: str, body: Callable[..., Any]) -> Any:
        return self.session.strategy.declare_process(self, name, body)

    def declare_workflow(self, block: WorkflowBlock, name: Optional[str] = None) -> ComponentDefinition:
        return self.session.strategy.declare_workflow(self, block, name)

    def workflow(
        self,
        name: Optional[str] = None,
        *,
        take: Union[str, Iterable[str], None] = (),
        emit: Union[str, Iterable[str], None] = (),
        publish: Union[Mapping[str, Mapping[str, Any]], Iterable[str], None] = None,
        variables: Iterable[str] = (),
    ) -> Callable[[Callable], ComponentDefinition]:
        """Decorator que declara o corpo decorado como workflow.

        Sem `name`, o workflow é anônimo e candidato a entry point.
        Retorna o ComponentDefinition registrado (não a função).
        """

        def decorator(fn: Callable) -> ComponentDefinition:
            block = WorkflowBlock.of(fn, take=take, emit=emit, publish=publish, variables=variables)
            return self.declare_workflow(block, name)

        return decorator

    def include(self, module: "ScriptContext", name: str, alias: Optional[str] = None) -> Any:
        return self.session.strategy.declare_include(self, module, name, alias)

    # -----------------------------
    # Execução
    # -----------------------------
    def lookup(self, name: str) -> Any:
        if not self.registry.has(name):
            raise UnknownComponentError.for_name(
                name, script=self.name, suggestions=closest(name, self.registry.names())
            )
        return self.registry.get(name)

    def invoke(self, target: Union[str, Any], *args: Any) -> Any:
        definition = self.lookup(target) if isinstance(target, str) else target
        return self.session.engine.invoke(definition, args)

    def run_script(self) -> Any:
        if self._main is None:
            return None
        return self._main(self)

    def run(self) -> Any:
        result = ScriptDriver(self).run()
        self.loaded = True
        return result

    def ensure_loaded(self) -> None:
        """Avalia o script como módulo, uma única vez, antes de um include."""
        if not self.loaded:
            self.binding.module = True
            self.run()
