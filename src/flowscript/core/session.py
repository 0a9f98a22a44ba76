# src/flowscript/core/session.py
"""
Session — contexto canônico de avaliação de scripts do flowscript.

A Session é o objeto explícito passado (por referência) a scripts,
estratégias, engine e driver. Ela substitui qualquer estado global do
processo e reúne:

- configuração efetiva (defaults + overrides) e seu hash
- estratégia de declaração (modular ou legada), escolhida uma única vez
- pilha de execução (frames de script / workflow / processo)
- runtime de canais e fábrica de processos
- lock reentrante que serializa avaliação e invocações
- event log estruturado e warnings por componente
- listeners de ciclo de vida do entry point

Princípios fundamentais:
- Isolamento por sessão (duas sessões nunca compartilham pilha ou logs)
- Comunicação explícita e rastreável
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from flowscript.core.config.hashing import compute_config_hash
from flowscript.core.config.loader import load_config, resolve_config
from flowscript.core.dataflow.channels import ChannelRuntime
from flowscript.core.engine.engine import InvocationEngine
from flowscript.core.engine.process import ProcessFactory
from flowscript.core.script.definition import ComponentDefinition
from flowscript.core.script.stack import ExecutionStack
from flowscript.core.script.strategy import ComponentExecutionStrategy, select_strategy


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionListener(Protocol):
    def on_before_entry_invocation(self, session: "Session") -> None:
        ...

    def on_after_entry_invocation(self, session: "Session") -> None:
        ...


@dataclass
class Session:
    """
    Contexto de uma sessão de avaliação de scripts.

    Campos canônicos:
    - config: configuração efetiva (DEFAULT_CONFIG + overrides)
    - session_id: identificador único da sessão
    - created_at: timestamp UTC de criação
    - channels: runtime de canais (publisher incluso)
    - process_factory: fábrica de TaskProcessor
    - warnings: warnings por componente
    - events: log estruturado de eventos
    """

    config: Dict[str, Any] = field(default_factory=dict)
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_utc_now)
    channels: ChannelRuntime = field(default_factory=ChannelRuntime)
    process_factory: ProcessFactory = field(default_factory=ProcessFactory)

    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    stack: ExecutionStack = field(default_factory=ExecutionStack, init=False, repr=False)
    lock: Any = field(default_factory=threading.RLock, init=False, repr=False)
    _listeners: List[SessionListener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.config = resolve_config(self.config)
        self.config_hash: str = compute_config_hash(self.config)
        self.strategy: ComponentExecutionStrategy = select_strategy(self.config)
        self.engine = InvocationEngine(self)
        self.log(
            component="session",
            level="INFO",
            message="session.created",
            config_hash=self.config_hash,
            modules=self.strategy.modules_enabled,
        )

    @classmethod
    def from_files(cls, *, defaults_path: str, local_path: Optional[str] = None, **kwargs: Any) -> "Session":
        return cls(config=load_config(defaults_path=defaults_path, local_path=local_path), **kwargs)

    # -----------------------------
    # Configuração
    # -----------------------------
    @property
    def modules_enabled(self) -> bool:
        return self.strategy.modules_enabled

    @property
    def trace_enabled(self) -> bool:
        return bool((self.config.get("engine", {}) or {}).get("trace", True))

    @property
    def entry_name(self) -> Optional[str]:
        return (self.config.get("script", {}) or {}).get("entry")

    @property
    def is_module(self) -> bool:
        return bool((self.config.get("script", {}) or {}).get("module", False))

    @property
    def params(self) -> Dict[str, Any]:
        return dict(self.config.get("params", {}) or {})

    def current_workflow(self) -> Optional[ComponentDefinition]:
        return self.stack.current_workflow()

    # -----------------------------
    # Ciclo de vida do entry point
    # -----------------------------
    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def notify_before_entry_invocation(self) -> None:
        self.log(component="session", level="DEBUG", message="entry.before")
        for listener in list(self._listeners):
            listener.on_before_entry_invocation(self)

    def notify_after_entry_invocation(self) -> None:
        self.log(component="session", level="DEBUG", message="entry.after")
        for listener in list(self._listeners):
            listener.on_after_entry_invocation(self)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, component: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "component": component,
            "level": level,
            "message": message,
            "timestamp": _utc_now(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, component: str, message: str) -> None:
        if component not in self.warnings:
            self.warnings[component] = []
        self.warnings[component].append(message)
        self.log(component=component, level="WARNING", message=message)
