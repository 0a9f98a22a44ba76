# src/flowscript/core/script/__init__.py
"""
# Script Core — flowscript

Este pacote define as estruturas de declaração e escopo de um script:

- **binding**: `ScriptBinding` (escopo global) e `ExecutionBinding` (escopo
  isolado de uma invocação)
- **stack**: `ExecutionStack`, pilha de componentes em execução da sessão
- **resolver**: declarações tipadas e `SignatureResolver`
- **definition**: `WorkflowBlock`, `BodyDef`, `ComponentDefinition`, `ProcessDef`
- **registry**: `ComponentRegistry`, unicidade de nomes e candidato a entry point
- **strategy**: modos de declaração modular e legado
- **script**: `ScriptContext`, API usada pelo nível superior do script

## Invariantes

- Cada invocação possui seu próprio `ExecutionBinding`
- Nomes de componentes são únicos por script
- Definições são imutáveis (renomear cria uma nova definição)
"""
