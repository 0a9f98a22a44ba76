# tests/core/script/test_registry.py
"""
Testes de unicidade e ordem no ComponentRegistry.

Os testes asseguram que:
- componentes com nomes distintos são aceitos e listados em ordem de registro
- nomes duplicados são rejeitados com `DuplicateNameError`
- apenas workflows podem ser anônimos
- o PRIMEIRO workflow anônimo é o candidato a entry point

Invariantes:
    - A tentativa de duplicidade não corrompe o estado interno
"""

import pytest

try:
    from flowscript.core.exceptions import DuplicateNameError
    from flowscript.core.script.definition import ProcessDef, WorkflowBlock, build_workflow
    from flowscript.core.script.registry import ComponentRegistry
except Exception as e:  # noqa: BLE001
    ComponentRegistry = None
    DuplicateNameError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que a implementação do ComponentRegistry esteja disponível para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ComponentRegistry. Implement:"
            "- src/flowscript/core/script/registry.py (ComponentRegistry)"
            f"Import error: {_IMPORT_ERR}"
        )


def _wf(name=None):
    return build_workflow(WorkflowBlock.of(lambda b: None), name)


def test_registry_rejects_duplicate_name():
    """
    Verifica que o registry rejeita um segundo componente com o mesmo nome,
    mesmo quando os tipos diferem (workflow vs processo).

    Invariantes:
        - O primeiro componente permanece registrado
        - O segundo é rejeitado com exceção específica
    """
    _require_imports()
    reg = ComponentRegistry()
    first = _wf("align")
    reg.add(first)

    with pytest.raises(DuplicateNameError) as excinfo:
        reg.add(ProcessDef("align", lambda: None))

    assert excinfo.value.details == {"component": "align", "kind": "process"}
    assert reg.get("align") is first
    assert len(reg) == 1


def test_registry_preserves_registration_order():
    _require_imports()
    reg = ComponentRegistry()
    a, anon, b = _wf("a"), _wf(), _wf("b")
    proc = ProcessDef("p", lambda: None)
    for d in (a, anon, proc, b):
        reg.add(d)

    assert reg.list() == [a, anon, proc, b]
    assert reg.names() == ["a", "p", "b"]
    assert reg.workflow_names() == ["a", "b"]
    assert reg.names("process") == ["p"]
    assert "p" in reg
    assert not reg.has("missing")


def test_first_anonymous_workflow_is_entry_candidate():
    _require_imports()
    reg = ComponentRegistry()
    assert reg.entry_candidate() is None

    first, second = _wf(), _wf()
    reg.add(first)
    reg.add(second)

    assert reg.entry_candidate() is first
    assert reg.anonymous_count() == 2


def test_only_workflows_may_be_anonymous():
    _require_imports()
    reg = ComponentRegistry()
    with pytest.raises(ValueError):
        reg.add(ProcessDef(None, lambda: None))
    with pytest.raises(ValueError):
        reg.add(_wf("   "))
