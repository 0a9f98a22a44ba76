"""
Engine do flowscript.

Este pacote contém a implementação responsável por **invocar** workflows
e por **dirigir** a execução de um script:

    - engine  → bind de entradas, execução do corpo, coleta de saídas e
                publicação (InvocationEngine)
    - driver  → seleção e invocação do entry workflow (ScriptDriver)
    - process → fronteira com o compilador de processos (ProcessFactory)

Invariantes:
    - Toda invocação desempilha seu frame antes de devolver o controle
    - Entradas, saídas e publicações seguem estritamente a ordem declarada

Limites explícitos:
    - Não agenda tarefas concorrentes
    - Não espera pela computação dataflow registrada pelos corpos
"""
