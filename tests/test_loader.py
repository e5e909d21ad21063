"""Tests for loading fact documents from YAML."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from factalgebra import CompositeNo, CompositeYes, NegatedToYes
from factalgebra.loader import FactDocument, build_fact, load_document


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "facts.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_load_single_fact(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          leaf:
            holds: false
            failure: "{0} was not empty"
            negated: "{0} was empty"
            args: [x]
    """)
    facts = load_document(path).build()
    assert list(facts) == ["fact"]
    assert facts["fact"].is_no
    assert facts["fact"].as_string == '"x" was not empty'


def test_load_named_facts_keep_order(tmp_yaml):
    path = tmp_yaml("""\
        facts:
          second:
            leaf: {holds: true, failure: "b failed", negated: "b held"}
          first:
            leaf: {holds: false, failure: "a failed", negated: "a held"}
    """)
    facts = load_document(path).build()
    assert list(facts) == ["second", "first"]


def test_and_node_builds_composite(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          and:
            - leaf: {holds: true, failure: "a failed", negated: "a held"}
            - leaf: {holds: false, failure: "n failed", negated: "n held"}
    """)
    fact = load_document(path).build()["fact"]
    assert isinstance(fact, CompositeNo)
    assert fact.as_string == "No(a held, but n failed)"


def test_and_right_operand_is_deferred(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          and:
            - leaf: {holds: false, failure: "n failed", negated: "n held"}
            - leaf: {holds: true, failure: "a failed", negated: "a held"}
    """)
    fact = load_document(path).build()["fact"]
    assert isinstance(fact, CompositeNo)
    assert fact.deferred_rhs.is_forced is False


def test_or_folds_left(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          or:
            - leaf: {holds: false, failure: "n failed", negated: "n held"}
            - leaf: {holds: false, failure: "m failed", negated: "m held"}
            - leaf: {holds: true, failure: "a failed", negated: "a held"}
    """)
    fact = load_document(path).build()["fact"]
    assert isinstance(fact, CompositeYes)
    assert fact.complexity == 3
    assert isinstance(fact.lhs, CompositeNo)


def test_not_node(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          not:
            leaf: {holds: false, failure: "n failed", negated: "n held"}
    """)
    fact = load_document(path).build()["fact"]
    assert isinstance(fact, NegatedToYes)


def test_leaf_with_all_roles(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          leaf:
            holds: true
            failure: "F {0}"
            negated: "N {0}"
            mid_sentence_failure: "f {0}"
            mid_sentence_negated: "n {0}"
            failure_args: [1]
            negated_args: [2]
            mid_sentence_failure_args: [3]
            mid_sentence_negated_args: [4]
    """)
    fact = load_document(path).build()["fact"]
    assert fact.failure_message == "F 1"
    assert fact.negated_failure_message == "N 2"
    assert fact.mid_sentence_failure_message == "f 3"
    assert fact.mid_sentence_negated_failure_message == "n 4"


def test_and_requires_two_operands(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          and:
            - leaf: {holds: true, failure: "a failed", negated: "a held"}
    """)
    with pytest.raises(ValidationError):
        load_document(path)


def test_unknown_leaf_key_rejected(tmp_yaml):
    path = tmp_yaml("""\
        fact:
          leaf: {holds: true, failure: "a", negated: "b", colour: red}
    """)
    with pytest.raises(ValidationError):
        load_document(path)


def test_empty_document_rejected():
    with pytest.raises(ValidationError, match="must contain"):
        FactDocument()


def test_non_mapping_document_rejected(tmp_yaml):
    path = tmp_yaml("- just\n- a list\n")
    with pytest.raises(ValueError, match="Expected a mapping"):
        load_document(path)


def test_build_fact_accepts_aliases_and_names():
    node = FactDocument.model_validate(
        {
            "fact": {
                "not": {
                    "or": [
                        {"leaf": {"holds": True, "failure": "a", "negated": "b"}},
                        {"leaf": {"holds": False, "failure": "c", "negated": "d"}},
                    ]
                }
            }
        }
    ).fact
    fact = build_fact(node)
    assert fact.is_no
