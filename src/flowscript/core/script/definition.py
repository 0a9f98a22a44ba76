# src/flowscript/core/script/definition.py
"""
Definição compilada de componentes do script.

Este módulo separa as duas fases do modelo de componentes:

    1. Resolução de assinatura: as declarações de um `WorkflowBlock` são
       duplicadas e percorridas pelo `SignatureResolver`, produzindo as
       entradas, saídas e alvos de publicação declarados.
    2. Execução: o corpo executável (`BodyDef`) é obtido do bloco original,
       de forma independente da resolução, e só roda quando o engine
       invoca o componente.

Componentes principais:
    - WorkflowBlock        → bloco de declaração bruto (declarações + corpo)
    - BodyDef              → corpo executável + texto-fonte para diagnóstico
    - ComponentDefinition  → workflow compilado e imutável
    - ProcessDef           → processo registrado no modo modular
    - build_workflow       → construção de um ComponentDefinition

Invariantes:
    - `declared_inputs` e `declared_outputs` não têm nomes duplicados
    - Um ComponentDefinition nunca é alterado após criado
    - Renomear produz uma NOVA definição que compartilha o mesmo corpo

Limites explícitos:
    - Não registra componentes (ver registry)
    - Não executa corpos (ver engine)
"""

from __future__ import annotations

import ast
import copy
import inspect
import textwrap
import tokenize
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, ClassVar, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple, Union

from .binding import ExecutionBinding, ScriptBinding
from .resolver import InputDecl, OutputDecl, PublishDecl, SignatureResolver


_BINDING_ACCESSORS = {"get_variable", "set_variable", "has_variable"}

ANONYMOUS_LABEL = "<anonymous>"


@dataclass(frozen=True)
class BodyDef:
    """Corpo executável de um workflow."""

    statements: Callable[[ExecutionBinding], Any]
    source: str = ""
    variable_names: FrozenSet[str] = frozenset()

    def __call__(self, binding: ExecutionBinding) -> Any:
        return self.statements(binding)


def _names(value: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _source_of(fn: Callable) -> str:
    try:
        return inspect.getsource(fn)
    except (OSError, TypeError, SyntaxError, tokenize.TokenError):
        return ""


def _is_name(node: ast.AST, name: str) -> bool:
    return isinstance(node, ast.Name) and node.id == name


def _str_constant(node: ast.AST) -> Optional[str]:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


def referenced_names(source: str) -> Set[str]:
    """
    Nomes de variáveis acessados no binding pelo corpo em `source`.

    O binding é o primeiro parâmetro da primeira função (ou lambda)
    encontrada. São reconhecidos `b["x"]` e `b.get_variable("x")`,
    `b.set_variable("x", ...)`, `b.has_variable("x")`.
    Fonte vazia ou sintaticamente inválida produz conjunto vazio.
    """
    if not source:
        return set()
    try:
        tree = ast.parse(textwrap.dedent(source))
    except SyntaxError:
        return set()

    fn = next(
        (n for n in ast.walk(tree) if isinstance(n, (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda))),
        None,
    )
    if fn is None or not fn.args.args:
        return set()
    param = fn.args.args[0].arg

    names: Set[str] = set()
    for node in ast.walk(fn):
        if isinstance(node, ast.Subscript) and _is_name(node.value, param):
            key = _str_constant(node.slice)
            if key is not None:
                names.add(key)
        elif (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and _is_name(node.func.value, param)
            and node.func.attr in _BINDING_ACCESSORS
            and node.args
        ):
            key = _str_constant(node.args[0])
            if key is not None:
                names.add(key)
    return names


@dataclass(frozen=True)
class WorkflowBlock:
    """
    Bloco de declaração bruto de um workflow.

    `declarations` é a sequência de declarações tipadas (take/emit/publish)
    e `main` o corpo que recebe o ExecutionBinding da invocação. `variables`
    permite declarar nomes referenciados que a análise estática do corpo
    não consegue enxergar.
    """

    declarations: Tuple[Any, ...]
    main: Callable[[ExecutionBinding], Any]
    source: Optional[str] = None
    variables: Tuple[str, ...] = ()

    @classmethod
    def of(
        cls,
        main: Callable[[ExecutionBinding], Any],
        *,
        take: Union[str, Iterable[str], None] = (),
        emit: Union[str, Iterable[str], None] = (),
        publish: Union[Mapping[str, Mapping[str, Any]], Iterable[str], None] = None,
        source: Optional[str] = None,
        variables: Iterable[str] = (),
    ) -> "WorkflowBlock":
        decls: List[Any] = [InputDecl(n) for n in _names(take)]
        decls += [OutputDecl(n) for n in _names(emit)]
        if isinstance(publish, Mapping):
            decls += [PublishDecl(n, dict(opts or {})) for n, opts in publish.items()]
        else:
            decls += [PublishDecl(n) for n in _names(publish)]
        return cls(tuple(decls), main, source, tuple(variables))

    def duplicate(self) -> "WorkflowBlock":
        return replace(self, declarations=tuple(copy.deepcopy(list(self.declarations))))

    def to_body(self) -> BodyDef:
        source = self.source if self.source is not None else _source_of(self.main)
        names = referenced_names(source) | set(self.variables)
        return BodyDef(self.main, source, frozenset(names))


@dataclass(frozen=True, eq=False)
class ComponentDefinition:
    """
    Workflow compilado.

    Campos:
    - name: nome único no registry (None para o workflow implícito/anônimo)
    - declared_inputs: entradas em ordem posicional
    - declared_outputs: saídas em ordem de declaração
    - declared_publish: alvo de publicação -> opções (somente leitura)
    - variable_names: variáveis referenciadas no corpo que não são entradas
      (informativo, sinaliza captura provavelmente não intencional)
    - body: corpo executável
    - owner: escopo global do script dono (fallthrough de leitura)
    """

    name: Optional[str]
    declared_inputs: Tuple[str, ...]
    declared_outputs: Tuple[str, ...]
    declared_publish: Mapping[str, Mapping[str, Any]]
    variable_names: FrozenSet[str]
    body: BodyDef
    owner: Optional[ScriptBinding] = field(default=None, repr=False)

    type: ClassVar[str] = "workflow"

    def __post_init__(self) -> None:
        for label, names in (("input", self.declared_inputs), ("output", self.declared_outputs)):
            if len(set(names)) != len(names):
                raise ValueError(f"Duplicate declared {label} in workflow `{self.name}`: {list(names)}")

    @property
    def label(self) -> str:
        return self.name if self.name is not None else ANONYMOUS_LABEL

    @property
    def source(self) -> str:
        return self.body.source

    @property
    def declared_variables(self) -> List[str]:
        return sorted(self.variable_names)

    def with_name(self, name: str) -> "ComponentDefinition":
        return replace(self, name=name)


@dataclass(frozen=True, eq=False)
class ProcessDef:
    """Processo declarado no modo modular; executado via ProcessFactory."""

    name: str
    body: Callable[..., Any]

    type: ClassVar[str] = "process"

    @property
    def label(self) -> str:
        return self.name

    def with_name(self, name: str) -> "ProcessDef":
        return replace(self, name=name)


def build_workflow(
    block: WorkflowBlock,
    name: Optional[str] = None,
    *,
    owner: Optional[ScriptBinding] = None,
) -> ComponentDefinition:
    """
    Constrói um ComponentDefinition a partir de um bloco bruto.

    A resolução roda sobre uma cópia das declarações; o corpo executável
    é extraído do bloco original.
    """
    resolver = SignatureResolver().resolve(block.duplicate().declarations)
    body = block.to_body()
    inputs = tuple(resolver.inputs())

    return ComponentDefinition(
        name=name,
        declared_inputs=inputs,
        declared_outputs=tuple(resolver.outputs()),
        declared_publish=MappingProxyType(
            {target: MappingProxyType(opts) for target, opts in resolver.publish().items()}
        ),
        variable_names=frozenset(body.variable_names - set(inputs)),
        body=body,
        owner=owner,
    )
