# src/flowscript/core/script/resolver.py
"""
Resolução da assinatura de um workflow.

Um bloco de workflow é descrito por uma sequência de declarações tipadas:

    - InputDecl(name)            → entrada declarada (`take`)
    - OutputDecl(name)           → saída declarada (`emit`)
    - PublishDecl(name, options) → alvo de publicação (`publish`)

O `SignatureResolver` percorre essas declarações UMA vez, no momento da
construção do `ComponentDefinition`, descobrindo o contrato de chamada do
componente sem executar o seu corpo.

Também é oferecido um ponto de interceptação textual (`intercept`) que
classifica chamadas por prefixo (`_get_`, `_emit_`, `_publish_`), usado por
frontends que produzem chamadas nomeadas em vez de declarações tipadas.

Invariantes:
    - A ordem da primeira ocorrência de cada nome é preservada
    - Nomes repetidos não geram duplicatas (a última declaração de publish
      define as opções)
    - Qualquer declaração não reconhecida é erro imediato

Limites explícitos:
    - Não executa o corpo do workflow
    - Não valida existência de variáveis
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from flowscript.core.exceptions import UnknownDeclarationError


GET_PREFIX = "_get_"
EMIT_PREFIX = "_emit_"
PUBLISH_PREFIX = "_publish_"


@dataclass(frozen=True)
class InputDecl:
    name: str


@dataclass(frozen=True)
class OutputDecl:
    name: str


@dataclass(frozen=True)
class PublishDecl:
    name: str
    options: Mapping[str, Any] = field(default_factory=dict)


Declaration = Union[InputDecl, OutputDecl, PublishDecl]


def _options_from(args: tuple) -> Dict[str, Any]:
    if len(args) == 1 and isinstance(args[0], Mapping):
        return dict(args[0])
    return {}


class SignatureResolver:
    """
    Interceptador de declarações de uma única passada de resolução.

    Após a passada, `inputs()`, `outputs()` e `publish()` devolvem cópias
    dos resultados; o resolver é então descartado.
    """

    def __init__(self) -> None:
        self._inputs: Dict[str, None] = {}
        self._outputs: Dict[str, None] = {}
        self._publish: Dict[str, Dict[str, Any]] = {}

    def accept(self, decl: Any) -> None:
        if isinstance(decl, InputDecl):
            self._inputs[decl.name] = None
        elif isinstance(decl, OutputDecl):
            self._outputs[decl.name] = None
        elif isinstance(decl, PublishDecl):
            self._publish[decl.name] = dict(decl.options or {})
        else:
            raise UnknownDeclarationError.for_call(decl)

    def intercept(self, call_name: str, *args: Any) -> None:
        """Classifica uma chamada nomeada pelo prefixo e registra a declaração."""
        if call_name.startswith(GET_PREFIX):
            self.accept(InputDecl(call_name[len(GET_PREFIX):]))
        elif call_name.startswith(EMIT_PREFIX):
            self.accept(OutputDecl(call_name[len(EMIT_PREFIX):]))
        elif call_name.startswith(PUBLISH_PREFIX):
            self.accept(PublishDecl(call_name[len(PUBLISH_PREFIX):], _options_from(args)))
        else:
            raise UnknownDeclarationError.for_call(call_name)

    def resolve(self, declarations: Iterable[Any]) -> "SignatureResolver":
        for decl in declarations:
            self.accept(decl)
        return self

    def inputs(self) -> List[str]:
        return list(self._inputs)

    def outputs(self) -> List[str]:
        return list(self._outputs)

    def publish(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(opts) for name, opts in self._publish.items()}
