# tests/core/merge/test_overlay_split.py
"""Testes da extração do overlay `when@<env>` do ambiente ativo."""

import pytest

from yaml_merge_loader.core.errors import MalformedInputError
from yaml_merge_loader.core.merge.keys import is_overlay_key, overlay_key
from yaml_merge_loader.core.merge.overlay import split_overlay


def test_matching_overlay_is_removed_and_returned():
    document = {"parameters": {"x": 0}, "when@prod": {"parameters": {"x": 1}}, "when@dev": {"a": 1}}
    remaining, fragment = split_overlay(document, "prod")
    assert fragment == {"parameters": {"x": 1}}
    assert remaining == {"parameters": {"x": 0}, "when@dev": {"a": 1}}
    assert "when@prod" in document  # input não é mutado


@pytest.mark.parametrize("environment", [None, "", "test"])
def test_no_match_returns_document_unchanged(environment):
    document = {"when@prod": {"parameters": {"x": 1}}}
    remaining, fragment = split_overlay(document, environment)
    assert fragment is None
    assert remaining is document


def test_null_overlay_is_treated_as_absent():
    remaining, fragment = split_overlay({"when@prod": None}, "prod")
    assert fragment is None
    assert remaining == {"when@prod": None}


def test_non_mapping_overlay_is_malformed():
    with pytest.raises(MalformedInputError, match="when@prod"):
        split_overlay({"when@prod": ["x"]}, "prod", file="/app/services.yaml")


def test_overlay_key_helpers():
    assert overlay_key("prod") == "when@prod"
    assert is_overlay_key("when@anything")
    assert not is_overlay_key("services")
