"""
flowscript — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do núcleo de definição e invocação
de workflows.

Objetivo:
- Permitir que resolver, registry, engine e driver levantem exceções
  semânticas tipadas
- Facilitar o mapeamento determinístico para FlowErrorPayload
- Evitar ValueError/RuntimeError genéricos em falhas de autoria de script

Regras:
- Toda exceção carrega o nome do componente envolvido em `details`
- Exceções carregam apenas dados estruturados (serializáveis)
- Nenhuma exceção deste módulo é recuperável: indicam defeito no script
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(eq=False)
class FlowException(Exception):
    """Base class para exceções internas do flowscript.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - Não congelar: o interpretador atribui `__traceback__` durante a propagação
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Declaração / Registro
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnknownDeclarationError(FlowException):
    """Chamada de declaração sem prefixo reconhecido durante a resolução."""

    @classmethod
    def for_call(cls, call: Any) -> "UnknownDeclarationError":
        return cls(
            message=f"Unknown workflow parameter definition: {call}",
            details={"call": str(call)},
            hint="Use apenas declarações take/emit/publish no bloco do workflow.",
        )


@dataclass(eq=False)
class DuplicateNameError(FlowException):
    """Nome de componente já registrado no registry do script."""

    @classmethod
    def for_name(cls, name: str, *, kind: str = "workflow") -> "DuplicateNameError":
        return cls(
            message=f"A {kind} named `{name}` is already defined",
            details={"component": name, "kind": kind},
            hint="Renomeie o componente ou inclua-o com um alias.",
        )


@dataclass(eq=False)
class UnknownComponentError(FlowException):
    """Nome de componente ausente no registry do script (invoke / include)."""

    @classmethod
    def for_name(cls, name: str, *, script: str, suggestions: List[str]) -> "UnknownComponentError":
        message = f"Unknown component `{name}` in script `{script}`"
        if suggestions:
            message += " -- Did you mean?\n" + "\n".join(f"  {s}" for s in suggestions)
        return cls(
            message=message,
            details={"component": name, "script": script, "suggestions": list(suggestions)},
        )


@dataclass(eq=False)
class ModuleFeatureDisabledError(FlowException):
    """Declaração modular utilizada com o modo legado ativo."""

    @classmethod
    def for_feature(cls, feature: str, *, component: Optional[str] = None) -> "ModuleFeatureDisabledError":
        return cls(
            message=(
                f"Module feature not enabled -- Set `dsl.modules: true` "
                f"to allow the definition of {feature}"
            ),
            details={"feature": feature, "component": component},
            hint="Habilite `dsl.modules` na configuração da sessão.",
        )


# ---------------------------------------------------------------------------
# Invocação
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ArityError(FlowException):
    """Número de argumentos difere do número de entradas declaradas."""

    @classmethod
    def for_call(cls, component: Optional[str], *, declared: int, received: int) -> "ArityError":
        return cls(
            message=(
                f"Workflow `{component}` declares {declared} input channels "
                f"but {received} were specified"
            ),
            details={"component": component, "declared": declared, "received": received},
        )


@dataclass(eq=False)
class MissingOutputError(FlowException):
    """Saída ou alvo de publish sem variável associada (ou bundle vazio)."""

    @classmethod
    def for_output(cls, component: Optional[str], name: str, *, reason: str = "missing") -> "MissingOutputError":
        if reason == "empty":
            message = f"Cannot emit empty output: {name}"
        elif reason == "publish":
            message = f"Missing workflow publish parameter: {name}"
        else:
            message = f"Missing workflow output parameter: {name}"
        return cls(
            message=message,
            details={"component": component, "output": name, "reason": reason},
        )


@dataclass(eq=False)
class AmbiguousOutputError(FlowException):
    """Saída declarada resolve para mais de um canal."""

    @classmethod
    def for_output(cls, component: Optional[str], name: str, *, size: int) -> "AmbiguousOutputError":
        return cls(
            message=f"Cannot emit a multi-channel output: {name}",
            details={"component": component, "output": name, "size": size},
            hint="Emita um único canal do bundle, ex.: bundle[\"nome\"].",
        )


@dataclass(eq=False)
class InvalidPublishTargetError(FlowException):
    """Alvo de publish não é canal nem bundle de canais."""

    @classmethod
    def for_target(cls, component: Optional[str], name: str, value: Any) -> "InvalidPublishTargetError":
        return cls(
            message=f"Illegal workflow publish parameter: {name} value: {value!r}",
            details={
                "component": component,
                "target": name,
                "value_type": type(value).__name__,
            },
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnknownEntryError(FlowException):
    """Nome de entry workflow solicitado não existe no registry."""

    @classmethod
    def for_name(cls, name: str, suggestions: List[str]) -> "UnknownEntryError":
        message = f"Unknown workflow entry name: {name}"
        if suggestions:
            message += " -- Did you mean?\n" + "\n".join(f"  {s}" for s in suggestions)
        return cls(
            message=message,
            details={"component": name, "suggestions": list(suggestions)},
        )

    @property
    def suggestions(self) -> List[str]:
        return list(self.details.get("suggestions", []))
