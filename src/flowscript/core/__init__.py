"""
Core do flowscript.

Este pacote contém a implementação canônica do modelo de componentes:

    - config    → carregamento, merge e hashing da configuração da sessão
    - dataflow  → fronteira com o runtime de canais
    - script    → bindings, pilha, resolução de assinatura, definições,
                  registry e estratégias de declaração
    - engine    → invocação de workflows e driver de entry point
    - session   → contexto explícito de uma sessão de avaliação

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global do processo
"""
