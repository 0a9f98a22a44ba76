# src/flowscript/core/config/__init__.py

"""
Camada de configuração da sessão flowscript.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e identificar a configuração de uma sessão de avaliação de scripts.

A configuração decide, uma única vez por sessão:
    - o modo de declaração (modular ou legado)
    - o nome explícito do entry workflow (quando houver)
    - se o script é carregado como módulo (sem entry point)
    - se eventos de rastreamento da invocação são registrados

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Nenhuma heurística implícita durante merge
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não executa scripts
    - Não interage com o Engine diretamente
"""
