# tests/core/merge/test_tree_merge.py
"""
Testes da política de merge de documentos (`merge_documents`).

Os testes asseguram que:
- um overlay vazio não altera a base
- namespaces vazios/falsy do overlay são ignorados
- namespaces ausentes na base são adotados do overlay
- listas concatenam itens do overlay seguidos dos itens da base
- em colisão de chave dentro de um namespace, a base vence
- namespaces `when@...` nunca são combinados
- nenhum input é mutado

Limites explícitos:
    - O caso especial "services" é coberto em test_services_merge.py
    - Não valida carregamento de arquivos
"""

import copy

import pytest

try:
    from yaml_merge_loader.core.merge.tree import combine_values, merge_documents
except Exception as e:  # noqa: BLE001
    merge_documents = None
    combine_values = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o TreeMerger esteja disponível para os testes.

    Falha explicitamente com uma mensagem orientada quando `merge_documents`
    não pode ser importado.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge module. Implement:\n"
            "- src/yaml_merge_loader/core/merge/tree.py (merge_documents)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_empty_overlay_is_noop():
    _require_imports()
    base = {"parameters": {"a": 1}, "imports": [{"resource": "x.yaml"}], "services": {"s": {"class": "S"}}}
    assert merge_documents(base, {}) == base


def test_falsy_overlay_namespace_is_skipped():
    _require_imports()
    base = {"parameters": {"a": 1}}
    out = merge_documents(base, {"parameters": {}, "framework": None, "imports": []})
    assert out == {"parameters": {"a": 1}}


def test_absent_namespace_is_adopted():
    _require_imports()
    out = merge_documents({"parameters": {"a": 1}}, {"framework": {"secret": "s"}})
    assert out == {"parameters": {"a": 1}, "framework": {"secret": "s"}}


def test_lists_concatenate_overlay_then_base_keeping_duplicates():
    """
    Verifica que sequências do overlay precedem as da base e que
    duplicatas presentes em ambos são preservadas.
    """
    _require_imports()
    base = {"imports": [{"resource": "b1.yaml"}, {"resource": "dup.yaml"}]}
    overlay = {"imports": [{"resource": "o1.yaml"}, {"resource": "dup.yaml"}]}
    out = merge_documents(base, overlay)
    assert out["imports"] == [
        {"resource": "o1.yaml"},
        {"resource": "dup.yaml"},
        {"resource": "b1.yaml"},
        {"resource": "dup.yaml"},
    ]


def test_base_wins_on_map_key_collision():
    _require_imports()
    base = {"parameters": {"shared": "base", "only_base": 1}}
    overlay = {"parameters": {"shared": "overlay", "only_overlay": 2}}
    out = merge_documents(base, overlay)
    assert out["parameters"] == {"shared": "base", "only_overlay": 2, "only_base": 1}


def test_collision_is_shallow_within_namespace():
    """A base vence a chave inteira: mapas aninhados não são combinados."""
    _require_imports()
    base = {"framework": {"session": {"enabled": True}}}
    overlay = {"framework": {"session": {"enabled": False, "name": "x"}}}
    out = merge_documents(base, overlay)
    assert out["framework"]["session"] == {"enabled": True}


def test_overlay_namespace_is_never_combined_when_present_in_base():
    _require_imports()
    base = {"when@prod": {"parameters": {"a": 1}}}
    overlay = {"when@prod": {"parameters": {"b": 2}}}
    assert merge_documents(base, overlay) == base


def test_overlay_namespace_is_adopted_when_absent_in_base():
    _require_imports()
    out = merge_documents({"parameters": {"a": 1}}, {"when@test": {"parameters": {"a": 2}}})
    assert out["when@test"] == {"parameters": {"a": 2}}


def test_inputs_are_not_mutated():
    _require_imports()
    base = {"parameters": {"a": 1}, "imports": [{"resource": "b.yaml"}]}
    overlay = {"parameters": {"b": 2}, "imports": [{"resource": "o.yaml"}]}
    base_before, overlay_before = copy.deepcopy(base), copy.deepcopy(overlay)
    out = merge_documents(base, overlay)
    out["parameters"]["c"] = 3
    out["imports"][0]["resource"] = "changed"
    assert base == base_before
    assert overlay == overlay_before


def test_scalar_or_mismatched_types_keep_base():
    _require_imports()
    assert combine_values("overlay", "base") == "base"
    assert combine_values([1], {"a": 1}) == {"a": 1}
    assert merge_documents({"version": 2}, {"version": 1}) == {"version": 2}
