# src/flowscript/core/script/strategy.py
"""
Estratégias de execução de declarações de componentes.

O flowscript suporta dois modelos de execução incompatíveis, escolhidos
UMA vez por sessão a partir de `dsl.modules`:

    - ModuleExecutionStrategy → modelo em duas fases: workflows e processos
      são apenas registrados; o driver escolhe e invoca o entry point
    - LegacyExecutionStrategy → um processo declarado executa imediatamente,
      de forma síncrona, no ponto da declaração; workflows e includes não
      são permitidos

Decisões arquiteturais:
    - Os dois modelos vivem atrás da mesma interface
      (`ComponentExecutionStrategy`), sem flags consultadas no meio do código
    - O modo legado não passa pelo registry nem pelo modelo em duas fases

Limites explícitos:
    - Não invoca workflows (ver engine)
    - Não seleciona entry point (ver driver)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from flowscript.core.exceptions import ModuleFeatureDisabledError

from .definition import ComponentDefinition, ProcessDef, WorkflowBlock, build_workflow

if TYPE_CHECKING:  # pragma: no cover
    from .script import ScriptContext


class ComponentExecutionStrategy(ABC):
    """Interface comum aos modos de declaração modular e legado."""

    modules_enabled: bool = False

    @abstractmethod
    def declare_process(self, script: "ScriptContext", name: str, body: Callable[..., Any]) -> Any:
        ...

    @abstractmethod
    def declare_workflow(
        self, script: "ScriptContext", block: WorkflowBlock, name: Optional[str] = None
    ) -> ComponentDefinition:
        ...

    @abstractmethod
    def declare_include(
        self, script: "ScriptContext", module: "ScriptContext", name: str, alias: Optional[str] = None
    ) -> Any:
        ...


class LegacyExecutionStrategy(ComponentExecutionStrategy):
    """Modo legado: processos executam na declaração."""

    modules_enabled = False

    def declare_process(self, script: "ScriptContext", name: str, body: Callable[..., Any]) -> Any:
        session = script.session
        processor = session.process_factory.create_processor(session, name, body)
        script.last_processor = processor
        return processor.run()

    def declare_workflow(
        self, script: "ScriptContext", block: WorkflowBlock, name: Optional[str] = None
    ) -> ComponentDefinition:
        raise ModuleFeatureDisabledError.for_feature("workflow components", component=name)

    def declare_include(
        self, script: "ScriptContext", module: "ScriptContext", name: str, alias: Optional[str] = None
    ) -> Any:
        raise ModuleFeatureDisabledError.for_feature("module includes", component=name)


class ModuleExecutionStrategy(ComponentExecutionStrategy):
    """Modo modular: declarações são compiladas e registradas."""

    modules_enabled = True

    def declare_process(self, script: "ScriptContext", name: str, body: Callable[..., Any]) -> ProcessDef:
        process = ProcessDef(name, body)
        script.registry.add(process)
        script.session.log(component=name, level="DEBUG", message="process.registered", script=script.name)
        return process

    def declare_workflow(
        self, script: "ScriptContext", block: WorkflowBlock, name: Optional[str] = None
    ) -> ComponentDefinition:
        session = script.session
        workflow = build_workflow(block, name, owner=script.binding)
        script.registry.add(workflow)

        session.log(
            component=workflow.label,
            level="DEBUG",
            message="workflow.registered",
            script=script.name,
            inputs=list(workflow.declared_inputs),
            outputs=list(workflow.declared_outputs),
            publish=list(workflow.declared_publish),
        )

        captured = [v for v in workflow.declared_variables if script.binding.has_variable(v)]
        if captured:
            session.add_warning(
                component=workflow.label,
                message=f"Workflow body references script variables not declared as inputs: {', '.join(captured)}",
            )

        if name is None and script.registry.anonymous_count() > 1:
            session.add_warning(
                component=workflow.label,
                message="Only the first unnamed workflow is used as entry point",
            )
        return workflow

    def declare_include(
        self, script: "ScriptContext", module: "ScriptContext", name: str, alias: Optional[str] = None
    ) -> Any:
        module.ensure_loaded()
        component = module.lookup(name)
        if alias is not None and alias != name:
            component = component.with_name(alias)
        script.registry.add(component)
        script.session.log(
            component=component.label,
            level="DEBUG",
            message="component.included",
            script=script.name,
            module=module.name,
            original=name,
        )
        return component


def select_strategy(config: Dict[str, Any]) -> ComponentExecutionStrategy:
    dsl = (config or {}).get("dsl", {}) or {}
    if bool(dsl.get("modules", True)):
        return ModuleExecutionStrategy()
    return LegacyExecutionStrategy()
