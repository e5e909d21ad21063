"""Boolean assertion outcomes with composable, renderable messages."""

from factalgebra.deferred import Deferred
from factalgebra.fact import (
    CompositeFact,
    CompositeNo,
    CompositeYes,
    Fact,
    FactOperator,
    LeafFact,
    LeafNo,
    LeafYes,
    NegatedFact,
    NegatedToNo,
    NegatedToYes,
    no,
    yes,
)
from factalgebra.formatting import MessageFormatError, format_message
from factalgebra.prettifier import Prettifier, default_prettifier
from factalgebra.render import render

__all__ = [
    "CompositeFact",
    "CompositeNo",
    "CompositeYes",
    "Deferred",
    "Fact",
    "FactOperator",
    "LeafFact",
    "LeafNo",
    "LeafYes",
    "MessageFormatError",
    "NegatedFact",
    "NegatedToNo",
    "NegatedToYes",
    "Prettifier",
    "default_prettifier",
    "format_message",
    "no",
    "render",
    "yes",
]
