"""
flowscript — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do flowscript.
Falhas de registro e invocação são convertidas em payloads serializáveis
antes de serem registradas no event log da sessão.

Payloads devem ser:

- explícitos
- serializáveis
- rastreáveis

A conversão nunca substitui a exceção original: o chamador registra o
payload e propaga a exceção.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import FlowException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowErrorPayload:
    """
    Payload canônico de erro do flowscript.

    Campos:
    - type: código estável do erro (nome da exceção tipada ou código do catálogo)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor do script
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
SCRIPT_EXECUTION_ERROR = "SCRIPT_EXECUTION_ERROR"


def exception_to_error(exc: Exception, *, code: str = ENGINE_EXECUTION_ERROR) -> FlowErrorPayload:
    """Converte exceções em FlowErrorPayload.

    Regras:
    - FlowException: já vem com message/details/hint; o código é o nome da classe.
    - Outras exceções (ex.: falha dentro do corpo do workflow): encapsuladas
      sob `code`, sem expor stack trace.
    """
    if isinstance(exc, FlowException):
        return FlowErrorPayload(
            type=exc.__class__.__name__,
            message=exc.message,
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return FlowErrorPayload(
        type=code,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o corpo do componente e o event log da sessão",
    )
