# src/flowscript/__init__.py
"""
flowscript — definição e invocação de componentes reutilizáveis de pipelines dataflow.

Um script declara workflows com entradas (`take`), saídas (`emit`) e alvos
de publicação (`publish`) explícitos e os invoca depois, possivelmente
muitas vezes e de forma aninhada, obtendo um bundle ordenado de canais.

Princípios centrais:
    - Resolução de assinatura e execução são fases separadas
    - Cada invocação tem escopo isolado e frame próprio na pilha da sessão
    - Nenhum estado global: tudo passa pela `Session`

Limites explícitos:
    - Não agenda nem executa tarefas concorrentes
    - Não define o parser/compilador de scripts
"""
from .core.session import Session
from .core.script.script import ScriptContext
from .core.script.definition import ComponentDefinition, WorkflowBlock, build_workflow
from .core.script.resolver import InputDecl, OutputDecl, PublishDecl
from .core.dataflow.channels import ChannelBundle, DataflowChannel

__all__ = [
    "Session",
    "ScriptContext",
    "ComponentDefinition",
    "WorkflowBlock",
    "build_workflow",
    "InputDecl",
    "OutputDecl",
    "PublishDecl",
    "ChannelBundle",
    "DataflowChannel",
]
