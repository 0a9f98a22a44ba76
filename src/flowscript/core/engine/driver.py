# src/flowscript/core/engine/driver.py
"""
Driver de execução de um script.

Decide, ao final da avaliação do nível superior de um script, se algum
workflow deve ser invocado como entry point:

    - script carregado como módulo → nenhum entry point; retorna o
      resultado do nível superior
    - entry name explícito → workflow com esse nome; se ausente, falha com
      `UnknownEntryError` e uma lista de sugestões por distância de edição
    - sem entry name → primeiro workflow anônimo registrado; se não houver,
      retorna o resultado do nível superior

Os hooks de ciclo de vida da sessão (`notify_before_entry_invocation` /
`notify_after_entry_invocation`) envolvem apenas a invocação do entry
point, nunca invocações aninhadas.
"""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

from flowscript.core.errors import SCRIPT_EXECUTION_ERROR, exception_to_error
from flowscript.core.exceptions import UnknownEntryError
from flowscript.core.script.definition import ComponentDefinition
from flowscript.core.util.closest import closest

if TYPE_CHECKING:  # pragma: no cover
    from flowscript.core.script.script import ScriptContext


class ScriptDriver:
    def __init__(self, script: "ScriptContext"):
        self.script = script

    @property
    def session(self) -> Any:
        return self.script.session

    def select_entry(self) -> Optional[ComponentDefinition]:
        registry = self.script.registry
        name = self.script.binding.entry_name

        if name:
            if registry.has(name) and isinstance(registry.get(name), ComponentDefinition):
                return registry.get(name)
            raise UnknownEntryError.for_name(name, closest(name, registry.workflow_names()))

        return registry.entry_candidate()

    def run(self) -> Any:
        session = self.session
        with session.lock:
            self.script.setup()
            with session.stack.frame(self.script):
                try:
                    return self._run0()
                except Exception as exc:
                    session.log(
                        component=self.script.name,
                        level="ERROR",
                        message="script.failed",
                        error=exception_to_error(exc, code=SCRIPT_EXECUTION_ERROR).to_dict(),
                    )
                    raise

    def _run0(self) -> Any:
        session = self.session
        result = self.script.run_script()

        if self.script.binding.module:
            session.log(component=self.script.name, level="DEBUG", message="script.loaded_as_module")
            return result

        entry = self.select_entry()
        if entry is None:
            session.log(component=self.script.name, level="DEBUG", message="No entry workflow defined")
            return result

        session.log(component=entry.label, level="INFO", message="entry.selected", script=self.script.name)
        session.notify_before_entry_invocation()
        output = session.engine.invoke(entry, ())
        session.notify_after_entry_invocation()
        return output
