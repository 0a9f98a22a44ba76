"""
Fixtures compartilhados para testes do flowscript.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas e determinísticas
- sessões isoladas (modo modular e modo legado)
- um ScriptContext pronto para declarar workflows
- uma factory de workflows a partir de corpos Python simples

Decisões arquiteturais:
    - Imports do core são realizados de forma lazy para melhorar
      a clareza de erros durante falhas
    - Cada teste recebe uma Session nova (sem estado compartilhado)

Invariantes:
    - Nenhuma fixture executa script real
    - Nenhuma fixture realiza I/O
"""

import pytest


# =====================================================
# Config Loader fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    Fixture que fornece um YAML de configuração padrão (defaults) do projeto.

    Representa o conteúdo típico de um `flowscript.defaults.yaml`, base
    sobre a qual configurações locais são aplicadas via deep-merge.

    Returns:
        str: Conteúdo YAML representando configuração padrão (defaults).
    """
    return """\
dsl:
  modules: true
script:
  entry: null
  module: false
engine:
  trace: true
params:
  reads: data/*.fq
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    Fixture que fornece um YAML de overrides locais.

    Usado para validar a precedência do arquivo local sobre os defaults
    e a preservação de chaves não sobrescritas.

    Returns:
        str: Conteúdo YAML representando configuração local de override.
    """
    return """\
script:
  entry: alpha
engine:
  trace: false
"""


# =====================================================
# Session / Script fixtures
# =====================================================

@pytest.fixture
def session():
    """
    Fixture que fornece uma Session determinística em modo modular.

    `session_id` e `created_at` são fixos para que eventos do log sejam
    comparáveis entre execuções.
    """
    from flowscript.core.session import Session

    return Session(session_id="session-test-001", created_at="2026-01-16T00:00:00+00:00")


@pytest.fixture
def legacy_session():
    """Session com `dsl.modules: false` (estratégia legada)."""
    from flowscript.core.session import Session

    return Session(
        config={"dsl": {"modules": False}},
        session_id="session-legacy-001",
        created_at="2026-01-16T00:00:00+00:00",
    )


@pytest.fixture
def script(session):
    from flowscript.core.script.script import ScriptContext

    return ScriptContext(session, name="main")


@pytest.fixture
def make_workflow(script):
    """
    Fixture factory que declara um workflow no `script` a partir de um corpo.

    Returns:
        Callable: `_make(main, *, name=None, take=(), emit=(), publish=None)`
        que devolve o ComponentDefinition registrado.
    """
    from flowscript.core.script.definition import WorkflowBlock

    def _make(main, *, name=None, take=(), emit=(), publish=None, variables=()):
        block = WorkflowBlock.of(main, take=take, emit=emit, publish=publish, variables=variables)
        return script.declare_workflow(block, name)

    return _make


@pytest.fixture
def published(session):
    """Registros (canal, opções) do publisher padrão da sessão."""
    return session.channels.publisher.records
