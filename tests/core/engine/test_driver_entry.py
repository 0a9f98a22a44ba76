# tests/core/engine/test_driver_entry.py
"""
Testes da seleção e invocação do entry point de um script (ScriptDriver).

Este módulo valida a decisão tomada ao final da avaliação do nível
superior de um script.

Os testes asseguram que:
- sem entry name, o primeiro workflow anônimo é invocado
- um entry name explícito seleciona o workflow com esse nome
- um entry name desconhecido falha com sugestões por distância de edição
- scripts carregados como módulo nunca invocam entry point
- sem candidato, o resultado do nível superior é devolvido
- os hooks de ciclo de vida envolvem apenas a invocação do entry point
- `session` e `params` são visíveis como variáveis globais do script

Decisões arquiteturais:
    - Falhas de script são registradas como `script.failed` e propagadas
    - A pilha de execução termina vazia em qualquer caminho

Limites explícitos:
    - Não valida regras de saída/publish (ver testes do engine)
"""

import pytest

try:
    from flowscript.core.exceptions import UnknownEntryError
    from flowscript.core.script.script import ScriptContext
    from flowscript.core.session import Session
except Exception as e:  # noqa: BLE001
    UnknownEntryError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o driver, a Session e as exceções de entry point estejam disponíveis.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing script driver modules. Implement:\n"
            "- src/flowscript/core/engine/driver.py (ScriptDriver)\n"
            "- src/flowscript/core/exceptions.py (UnknownEntryError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


class RecordingListener:
    def __init__(self):
        self.calls = []

    def on_before_entry_invocation(self, session):
        self.calls.append(("before", session.stack.depth()))

    def on_after_entry_invocation(self, session):
        self.calls.append(("after", session.stack.depth()))


def _pipeline(trace):
    def main(script):
        @script.workflow("add", take=["x", "y"], emit=["z"])
        def add(b):
            b["z"] = b["x"] + b["y"]

        @script.workflow("alpha", emit=["out"])
        def alpha(b):
            trace.append("alpha")
            b["out"] = "alpha"

        @script.workflow("beta", emit=["out"])
        def beta(b):
            trace.append("beta")
            b["out"] = "beta"

        @script.workflow(emit=["out"])
        def entry(b):
            trace.append("entry")
            b["out"] = script.invoke("add", 1, 2)["z"]

        return "top-level"

    return main


def test_anonymous_workflow_is_entry_point(session):
    """
    Verifica o cenário canônico de execução de script.

    Invariantes:
        - O workflow anônimo é invocado sem argumentos
        - O resultado de `run()` é o bundle de saída do entry point
        - Listeners são notificados exatamente uma vez, mesmo com
          invocações aninhadas dentro do entry point
        - A pilha termina vazia
    """
    _require_imports()
    trace = []
    listener = RecordingListener()
    session.add_listener(listener)

    script = ScriptContext(session, main=_pipeline(trace))
    out = script.run()

    assert trace == ["entry"]
    assert out["out"].read() == 3
    assert listener.calls == [("before", 1), ("after", 1)]
    assert script.loaded is True
    assert session.stack.is_empty()

    selected = next(e for e in session.events if e["message"] == "entry.selected")
    assert selected["component"] == "<anonymous>"


def test_explicit_entry_name_wins():
    _require_imports()
    trace = []
    session = Session(config={"script": {"entry": "beta"}})

    out = ScriptContext(session, main=_pipeline(trace)).run()

    assert trace == ["beta"]
    assert out["out"].read() == "beta"


def test_unknown_entry_name_suggests_closest():
    """
    Verifica que `script.entry: alph` falha com `UnknownEntryError` e sugere
    `alpha`, o único workflow a distância de edição mínima.

    Invariantes:
        - Nenhum workflow é invocado
        - Listeners não são notificados
        - A falha é registrada como `script.failed`
    """
    _require_imports()
    trace = []
    session = Session(config={"script": {"entry": "alph"}})
    listener = RecordingListener()
    session.add_listener(listener)

    with pytest.raises(UnknownEntryError) as excinfo:
        ScriptContext(session, main=_pipeline(trace)).run()

    assert excinfo.value.suggestions == ["alpha"]
    assert str(excinfo.value) == "Unknown workflow entry name: alph -- Did you mean?\n  alpha"
    assert trace == []
    assert listener.calls == []
    assert session.stack.is_empty()

    failed = next(e for e in session.events if e["message"] == "script.failed")
    assert failed["component"] == "main"
    assert failed["error"]["type"] == "UnknownEntryError"


def test_entry_name_must_be_a_workflow():
    _require_imports()
    session = Session(config={"script": {"entry": "align"}})

    def main(script):
        script.process("align", lambda: None)

        @script.workflow("align_all")
        def align_all(b):
            pass

    with pytest.raises(UnknownEntryError) as excinfo:
        ScriptContext(session, main=main).run()

    assert excinfo.value.suggestions == ["align_all"]


def test_module_script_never_invokes_entry():
    _require_imports()
    trace = []
    session = Session(config={"script": {"module": True}})
    listener = RecordingListener()
    session.add_listener(listener)

    result = ScriptContext(session, main=_pipeline(trace)).run()

    assert result == "top-level"
    assert trace == []
    assert listener.calls == []


def test_no_entry_returns_top_level_result(session):
    _require_imports()

    def main(script):
        @script.workflow("only_named")
        def only_named(b):
            raise AssertionError("must not run")

        return 42

    assert ScriptContext(session, main=main).run() == 42
    assert any(e["message"] == "No entry workflow defined" for e in session.events)


def test_entry_failure_propagates_and_unwinds(session):
    _require_imports()
    listener = RecordingListener()
    session.add_listener(listener)

    def main(script):
        @script.workflow()
        def entry(b):
            raise RuntimeError("entry failed")

    with pytest.raises(RuntimeError, match="entry failed"):
        ScriptContext(session, main=main).run()

    assert listener.calls == [("before", 1)]
    assert session.stack.is_empty()

    failed = next(e for e in session.events if e["message"] == "script.failed")
    assert failed["error"]["type"] == "SCRIPT_EXECUTION_ERROR"
    assert failed["error"]["message"] == "entry failed"


def test_session_and_params_are_script_globals():
    """
    Verifica que o corpo do entry point enxerga `session` e `params`
    através do escopo global do script.
    """
    _require_imports()
    session = Session(config={"params": {"reads": "data/*.fq"}})

    def main(script):
        @script.workflow(emit=["reads", "same"])
        def entry(b):
            b["reads"] = b["params"]["reads"]
            b["same"] = b["session"] is session

    out = ScriptContext(session, main=main).run()

    assert out["reads"].read() == "data/*.fq"
    assert out["same"].read() is True


def test_explicit_params_variable_is_preserved(session):
    _require_imports()
    script = ScriptContext(session, variables={"params": {"n": 1}})
    script.setup()

    assert script.binding["params"] == {"n": 1}
    assert script.binding["session"] is session


def test_legacy_script_runs_processes_eagerly(legacy_session):
    _require_imports()
    ran = []

    def main(script):
        script.process("hello", lambda: ran.append("hello"))
        return "done"

    assert ScriptContext(legacy_session, main=main).run() == "done"
    assert ran == ["hello"]
