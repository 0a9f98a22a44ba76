# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do flowscript.

Garantem apenas que o pacote pode ser importado e que a API pública
exportada está completa.

Limites explícitos:
    - Não testar lógica de negócio
    - Não acumular asserts funcionais
"""


def test_smoke():
    """
    Smoke test mínimo do repositório: o pacote importa sem falhas
    estruturais e expõe os símbolos públicos declarados em `__all__`.
    """
    import flowscript

    for name in flowscript.__all__:
        assert hasattr(flowscript, name), name
