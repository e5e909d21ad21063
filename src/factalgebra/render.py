"""Rendering of fact trees into diagnostic strings.

Small trees (fewer than three leaves) read as one sentence, e.g.
``Yes(x was empty, and y was empty)``. Larger trees are printed as an
indented tree with one leaf per line.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import Iterable, assert_never, cast

import yaml

from factalgebra.deferred import Deferred
from factalgebra.fact import (
    AnyFact,
    CompositeFact,
    CompositeNo,
    CompositeYes,
    Fact,
    FactOperator,
    LeafNo,
    LeafYes,
    NegatedFact,
    NegatedToNo,
    NegatedToYes,
)
from factalgebra.formatting import format_message
from factalgebra.prettifier import identity_prettifier

logger = logging.getLogger(__name__)

SIMPLE_COMPLEXITY_LIMIT = 3
INDENT = "  "


@lru_cache(maxsize=None)
def messages() -> dict[str, str]:
    """Connector templates bundled with the package."""
    text = (
        resources.files("factalgebra")
        .joinpath("resources/messages.yaml")
        .read_text(encoding="utf-8")
    )
    return yaml.safe_load(text)


def _connect(key: str, lhs: str, rhs: str) -> str:
    return format_message(messages()[key], [lhs, rhs], identity_prettifier)


def comma_and(lhs: str, rhs: str) -> str:
    return _connect("comma_and", lhs, rhs)


def comma_but(lhs: str, rhs: str) -> str:
    return _connect("comma_but", lhs, rhs)


def yes_or_no(fact: Fact) -> str:
    return "Yes" if fact.is_yes else "No"


def indent_lines(level: int, texts: Iterable[str]) -> list[str]:
    """Indent every line of every text by *level* steps."""
    prefix = INDENT * level
    return ["\n".join(prefix + line for line in text.split("\n")) for text in texts]


def render(fact: Fact) -> str:
    """Render *fact* as a sentence or, from three leaves on, as a tree.

    Choosing the mode needs the complexity of the whole tree, so a
    short-circuited right operand is forced here and any error it raises
    propagates. Composition and :func:`simple_string` never force it.
    """
    complexity = fact.complexity
    if complexity < SIMPLE_COMPLEXITY_LIMIT:
        logger.debug("Rendering fact of complexity %d as a sentence", complexity)
        return simple_string(fact)
    logger.debug("Rendering fact of complexity %d as a tree", complexity)
    return complex_string(fact)


def _composite_body(composite: CompositeFact) -> str:
    lhs = composite.lhs
    if composite.is_yes:
        if composite.operator is FactOperator.AND:
            return comma_and(simple_string(lhs), simple_string(composite.rhs))
        if lhs.is_yes:
            return simple_string(lhs)
        return comma_but(simple_string(lhs), simple_string(composite.rhs))

    if composite.operator is FactOperator.AND:
        if lhs.is_no:
            return simple_string(lhs)
        return comma_but(simple_string(lhs), simple_string(composite.rhs))
    return comma_and(simple_string(lhs), simple_string(composite.rhs))


def de_morgan(negated: NegatedFact) -> CompositeFact:
    """Rewrite ``!(a && b)`` as ``!a || !b`` and ``!(a || b)`` as ``!a && !b``.

    The rewritten right operand stays deferred.
    """
    composite = negated.wrapped
    if not isinstance(composite, CompositeFact):
        raise TypeError(f"Expected a negated composite, got {composite!r}")
    if composite.operator is FactOperator.AND:
        operator = FactOperator.OR
    else:
        operator = FactOperator.AND
    rhs: Deferred[Fact] = Deferred(lambda: composite.rhs.negate())
    if negated.is_yes:
        return CompositeYes(operator, composite.lhs.negate(), rhs)
    return CompositeNo(operator, composite.lhs.negate(), rhs)


def simple_string(fact: Fact) -> str:
    node = cast(AnyFact, fact)
    if isinstance(node, (CompositeYes, CompositeNo)):
        return yes_or_no(node) + "(" + _composite_body(node) + ")"
    elif isinstance(node, (NegatedToYes, NegatedToNo)):
        wrapped = cast(AnyFact, node.wrapped)
        if isinstance(wrapped, (LeafYes, LeafNo)):
            return wrapped.negated_failure_message
        elif isinstance(wrapped, (NegatedToYes, NegatedToNo)):
            return simple_string(wrapped.wrapped)
        elif isinstance(wrapped, (CompositeYes, CompositeNo)):
            return simple_string(de_morgan(node))
        else:
            assert_never(wrapped)
    elif isinstance(node, (LeafYes, LeafNo)):
        if node.is_yes:
            return node.negated_failure_message
        return node.failure_message
    else:
        assert_never(node)


def complex_string(fact: Fact) -> str:
    node = cast(AnyFact, fact)
    if isinstance(node, (CompositeYes, CompositeNo)):
        children = indent_lines(1, [complex_string(node.lhs), complex_string(node.rhs)])
        return (
            yes_or_no(node)
            + "(\n"
            + f" {node.operator.value}\n".join(children)
            + "\n)"
        )
    elif isinstance(node, (NegatedToYes, NegatedToNo)):
        return "!" + complex_string(node.wrapped)
    elif isinstance(node, (LeafYes, LeafNo)):
        return yes_or_no(node) + "(" + simple_string(node) + ")"
    else:
        assert_never(node)
