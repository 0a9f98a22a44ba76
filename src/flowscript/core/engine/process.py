# src/flowscript/core/engine/process.py
"""
Fronteira com o compilador de processos.

A compilação real de um processo em uma unidade de trabalho executável
é externa ao flowscript. Este módulo define apenas o contrato mínimo
usado pelas estratégias de declaração e pelo engine:

    ProcessFactory.create_processor(session, name, body) -> TaskProcessor
    TaskProcessor.run(*args) -> resultado

A implementação padrão executa o corpo do processo de forma síncrona.
"""

from __future__ import annotations

from typing import Any, Callable


class TaskProcessor:
    def __init__(self, session: Any, name: str, body: Callable[..., Any]):
        self.session = session
        self.name = name
        self.body = body

    def run(self, *args: Any) -> Any:
        self.session.log(component=self.name, level="INFO", message="process.run", arguments=len(args))
        return self.body(*args)


class ProcessFactory:
    def create_processor(self, session: Any, name: str, body: Callable[..., Any]) -> TaskProcessor:
        return TaskProcessor(session, name, body)
