# src/flowscript/core/engine/engine.py
"""
Engine de invocação de workflows do flowscript.

Orquestra UMA chamada de um ComponentDefinition:

    1. bind dos argumentos posicionais às entradas declaradas
    2. push do frame na pilha de execução da sessão
    3. execução do corpo com um ExecutionBinding novo
    4. coleta das saídas declaradas em um ChannelBundle
    5. publicação dos alvos declarados
    6. pop do frame (sempre, com sucesso ou falha)

Máquina de estados de uma invocação:

    CREATED → INPUTS_BOUND → BODY_RUNNING → OUTPUTS_COLLECTED
            → PUBLISH_APPLIED → DONE

Qualquer falha leva diretamente a DONE; o erro é registrado no event log
da sessão como FlowErrorPayload e a exceção original é propagada.

Ajustes:
- A execução do corpo é síncrona: o corpo registra wiring dataflow com o
  runtime de canais e o engine nunca espera pela computação resultante.
- Saídas (emit) promovem valores simples a canais de uso único; alvos de
  publish nunca são promovidos.
- Bundles passados como argumento são espalhados em seus canais antes da
  verificação de aridade (encadeamento de invocações).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from flowscript.core.dataflow.channels import ChannelBundle, ChannelRuntime
from flowscript.core.errors import exception_to_error
from flowscript.core.exceptions import (
    AmbiguousOutputError,
    ArityError,
    InvalidPublishTargetError,
    MissingOutputError,
)
from flowscript.core.script.binding import ExecutionBinding
from flowscript.core.script.definition import ComponentDefinition, ProcessDef


class InvocationState(str, Enum):
    """Estados de uma invocação; os valores aparecem no event log."""

    CREATED = "created"
    INPUTS_BOUND = "inputs_bound"
    BODY_RUNNING = "body_running"
    OUTPUTS_COLLECTED = "outputs_collected"
    PUBLISH_APPLIED = "publish_applied"
    DONE = "done"


@dataclass
class Invocation:
    """Estado transitório de uma chamada; existe apenas durante `invoke`."""

    definition: ComponentDefinition
    binding: ExecutionBinding
    state: InvocationState = InvocationState.CREATED
    output: Optional[ChannelBundle] = None
    error: Optional[Dict[str, Any]] = None


class InvocationEngine:
    """Engine canônico de invocação (bind / run / collect / publish)."""

    def __init__(self, session: Any):
        self.session = session

    @property
    def channels(self) -> ChannelRuntime:
        return self.session.channels

    # ------------------------------------------------------------------
    # Rastreamento
    # ------------------------------------------------------------------
    def _trace(self, invocation: Invocation, message: str, **extra: Any) -> None:
        if self.session.trace_enabled:
            self.session.log(
                component=invocation.definition.label,
                level="DEBUG",
                message=message,
                **extra,
            )

    def _advance(self, invocation: Invocation, state: InvocationState) -> None:
        invocation.state = state
        self._trace(invocation, "invocation.state", state=state.value)

    def _fail(self, invocation: Invocation, exc: Exception) -> None:
        failed_in = invocation.state
        invocation.error = exception_to_error(exc).to_dict()
        invocation.state = InvocationState.DONE
        self.session.log(
            component=invocation.definition.label,
            level="ERROR",
            message="invocation.failed",
            state=failed_in.value,
            error=invocation.error,
        )

    # ------------------------------------------------------------------
    # Etapas
    # ------------------------------------------------------------------
    def collect_inputs(self, invocation: Invocation, args: Sequence[Any]) -> None:
        definition = invocation.definition
        params = ChannelBundle.spread(args)
        if len(params) != len(definition.declared_inputs):
            raise ArityError.for_call(
                definition.label,
                declared=len(definition.declared_inputs),
                received=len(params),
            )

        for name, value in zip(definition.declared_inputs, params):
            invocation.binding.set_variable(name, value)

    def collect_outputs(self, invocation: Invocation) -> ChannelBundle:
        definition = invocation.definition
        binding = invocation.binding
        channels: Dict[str, Any] = {}

        for name in definition.declared_outputs:
            if not binding.has_variable(name):
                raise MissingOutputError.for_output(definition.label, name)
            value = binding.get_variable(name)

            if self.channels.is_channel(value):
                channels[name] = value

            elif self.channels.is_bundle(value):
                if value.size() > 1:
                    raise AmbiguousOutputError.for_output(definition.label, name, size=value.size())
                if value.size() == 0:
                    raise MissingOutputError.for_output(definition.label, name, reason="empty")
                channels[name] = value.get(0)

            else:
                channel = self.channels.create(single_use=True)
                self.channels.bind(channel, value)
                channels[name] = channel

        return ChannelBundle(channels)

    def publish_outputs(self, invocation: Invocation) -> int:
        definition = invocation.definition
        binding = invocation.binding
        published = 0

        for name, options in definition.declared_publish.items():
            if not binding.has_variable(name):
                raise MissingOutputError.for_output(definition.label, name, reason="publish")
            value = binding.get_variable(name)

            if self.channels.is_channel(value):
                self.channels.publish(value, options)
                published += 1

            elif self.channels.is_bundle(value):
                for channel in value:
                    self.channels.publish(channel, options)
                    published += 1

            else:
                raise InvalidPublishTargetError.for_target(definition.label, name, value)

        return published

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def invoke(self, definition: Any, args: Sequence[Any] = ()) -> Any:
        if isinstance(definition, ProcessDef):
            return self._invoke_process(definition, args)

        with self.session.lock:
            invocation = Invocation(definition, ExecutionBinding(definition.owner))
            self._trace(invocation, "invocation.started", depth=self.session.stack.depth())
            try:
                self.collect_inputs(invocation, args)
                self._advance(invocation, InvocationState.INPUTS_BOUND)

                with self.session.stack.frame(definition):
                    self._advance(invocation, InvocationState.BODY_RUNNING)
                    definition.body(invocation.binding)

                    invocation.output = self.collect_outputs(invocation)
                    self._advance(invocation, InvocationState.OUTPUTS_COLLECTED)

                    published = self.publish_outputs(invocation)
                    self._advance(invocation, InvocationState.PUBLISH_APPLIED)

            except Exception as exc:
                self._fail(invocation, exc)
                raise

            invocation.state = InvocationState.DONE
            self._trace(
                invocation,
                "invocation.finished",
                outputs=invocation.output.names(),
                published=published,
            )
            return invocation.output

    def _invoke_process(self, process: ProcessDef, args: Sequence[Any]) -> Any:
        session = self.session
        with session.lock, session.stack.frame(process):
            processor = session.process_factory.create_processor(session, process.name, process.body)
            return processor.run(*ChannelBundle.spread(args))
