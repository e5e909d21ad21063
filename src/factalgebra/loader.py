"""YAML documents describing fact trees.

Example::

    facts:
      list-is-empty:
        and:
          - leaf:
              holds: false
              failure: "{0} was not empty"
              negated: "{0} was empty"
              args: [[1, 2]]
          - not:
              leaf: {holds: true, failure: "x was null", negated: "x was not null"}

Leaf outcomes are spelled ``holds: true``/``holds: false`` because YAML
reads bare ``yes``/``no`` keys as booleans.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from factalgebra.fact import Fact, no, yes


class LeafSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    holds: bool
    failure: str
    negated: str
    mid_sentence_failure: str | None = None
    mid_sentence_negated: str | None = None
    args: list[Any] | None = None
    failure_args: list[Any] | None = None
    negated_args: list[Any] | None = None
    mid_sentence_failure_args: list[Any] | None = None
    mid_sentence_negated_args: list[Any] | None = None

    def build(self) -> Fact:
        make = yes if self.holds else no
        return make(
            self.failure,
            self.negated,
            self.mid_sentence_failure,
            self.mid_sentence_negated,
            args=self.args,
            failure_args=self.failure_args,
            negated_args=self.negated_args,
            mid_sentence_failure_args=self.mid_sentence_failure_args,
            mid_sentence_negated_args=self.mid_sentence_negated_args,
        )


class LeafNode(BaseModel):
    model_config = ConfigDict(extra="forbid")
    leaf: LeafSpec


class AndNode(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    and_: list[FactNode] = Field(alias="and", min_length=2)


class OrNode(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    or_: list[FactNode] = Field(alias="or", min_length=2)


class NotNode(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    not_: FactNode = Field(alias="not")


FactNode = Union[LeafNode, AndNode, OrNode, NotNode]

AndNode.model_rebuild()
OrNode.model_rebuild()
NotNode.model_rebuild()


def build_fact(node: FactNode) -> Fact:
    """Build a fact tree; right operands are passed to the combinators deferred."""
    if isinstance(node, LeafNode):
        return node.leaf.build()
    if isinstance(node, NotNode):
        return build_fact(node.not_).negate()
    if isinstance(node, AndNode):
        result = build_fact(node.and_[0])
        for operand in node.and_[1:]:
            result = result.and_(partial(build_fact, operand))
        return result
    if isinstance(node, OrNode):
        result = build_fact(node.or_[0])
        for operand in node.or_[1:]:
            result = result.or_(partial(build_fact, operand))
        return result
    raise ValueError(f"Unknown fact node: {node!r}")


class FactDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")
    fact: FactNode | None = None
    facts: dict[str, FactNode] = {}

    @model_validator(mode="after")
    def must_describe_a_fact(self) -> FactDocument:
        if self.fact is None and not self.facts:
            raise ValueError("document must contain 'fact' or a non-empty 'facts'")
        if self.fact is not None and "fact" in self.facts:
            raise ValueError("'facts' must not contain a fact named 'fact'")
        return self

    def build(self) -> dict[str, Fact]:
        """Build every fact of the document, keyed by name."""
        built: dict[str, Fact] = {}
        if self.fact is not None:
            built["fact"] = build_fact(self.fact)
        for name, node in self.facts.items():
            built[name] = build_fact(node)
        return built


def load_document(path: Path) -> FactDocument:
    """Load and validate a fact document from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")

    return FactDocument(**raw)
