# tests/core/merge/test_services_merge.py
"""
Testes do merge especial do namespace "services".

Os testes asseguram que:
- `_defaults` do overlay é propagado a definições que omitem a opção
- opções declaradas nunca são sobrescritas por `_defaults`
- `_instanceof` não recebe defaults
- `_defaults` do overlay é removido antes da iteração (nunca chega à base)
- aliases (strings) e `None` são atômicos em qualquer dos lados
- em colisão, a base vence e opções em lista concatenam (overlay primeiro)
"""

import pytest

from yaml_merge_loader.core.merge.tree import apply_service_defaults, merge_documents, merge_services


def test_defaults_fill_missing_options_only():
    assert apply_service_defaults({"a": 9}, {"a": 1, "b": 2}) == {"a": 9, "b": 2}


def test_defaults_propagate_to_new_services():
    base = {"services": {"existing": {"class": "E"}}}
    overlay = {
        "services": {
            "_defaults": {"autowire": True, "public": False},
            "mailer": {"class": "Mailer", "public": True},
        }
    }
    out = merge_documents(base, overlay)
    assert out["services"]["mailer"] == {"class": "Mailer", "public": True, "autowire": True}
    assert out["services"]["existing"] == {"class": "E"}


def test_overlay_defaults_are_stripped_before_iteration():
    """
    Garante que `_defaults` é removido do mapa "services" do *overlay*.

    Sob a leitura alternativa (remoção mirando um nível mais profundo),
    `_defaults` do overlay seria tratado como um serviço comum e acabaria
    copiado para a base — este teste falharia nesse caso.
    """
    base = {"services": {"app": {"class": "App"}}}
    overlay = {"services": {"_defaults": {"autowire": True}, "other": {"class": "O"}}}
    out = merge_services(base["services"], overlay["services"])
    assert "_defaults" not in out
    assert out["other"] == {"class": "O", "autowire": True}


def test_base_defaults_are_preserved_untouched():
    base = {"_defaults": {"public": True}, "app": {"class": "App"}}
    overlay = {"_defaults": {"public": False, "autowire": True}}
    assert merge_services(base, overlay) == base


def test_instanceof_does_not_receive_defaults():
    overlay = {"_defaults": {"autowire": True}, "_instanceof": {"App\\Handler": {"tags": ["h"]}}}
    out = merge_services({}, overlay)
    assert out["_instanceof"] == {"App\\Handler": {"tags": ["h"]}}


@pytest.mark.parametrize("incoming", ["@other", "other", None])
def test_atomic_overlay_never_alters_existing_base_entry(incoming):
    base = {"svc": {"class": "Base", "arguments": [1]}}
    out = merge_services(base, {"svc": incoming})
    assert out == base


@pytest.mark.parametrize("existing", ["@other", None])
def test_atomic_base_entry_is_kept(existing):
    base = {"svc": existing}
    out = merge_services(base, {"svc": {"class": "Overlay"}})
    assert out == {"svc": existing}


def test_alias_is_adopted_when_absent():
    out = merge_services({}, {"logger": "@monolog.logger"})
    assert out == {"logger": "@monolog.logger"}


def test_colliding_definitions_base_wins_and_lists_concatenate():
    base = {"svc": {"class": "Base", "tags": ["base_tag"]}}
    overlay = {
        "_defaults": {"autowire": False},
        "svc": {"class": "Overlay", "tags": ["overlay_tag"], "lazy": True},
    }
    out = merge_services(base, overlay)
    assert out["svc"] == {
        "class": "Base",
        "tags": ["overlay_tag", "base_tag"],
        "lazy": True,
        "autowire": False,
    }


def test_services_namespace_absent_in_base_is_adopted_verbatim():
    overlay = {"services": {"_defaults": {"autowire": True}, "a": {"class": "A"}}}
    out = merge_documents({"parameters": {"x": 1}}, overlay)
    assert out["services"] == overlay["services"]


def test_null_services_in_base_receives_overlay_services():
    out = merge_documents({"services": None}, {"services": {"a": {"class": "A"}}})
    assert out["services"] == {"a": {"class": "A"}}


def test_short_arguments_form_receives_overlay_defaults():
    overlay = {"_defaults": {"autowire": True}, "handler": ["@logger"]}
    out = merge_services({}, overlay)
    assert out["handler"] == {"arguments": ["@logger"], "autowire": True}


def test_short_arguments_form_is_kept_without_defaults():
    assert merge_services({}, {"handler": ["@logger"]}) == {"handler": ["@logger"]}
