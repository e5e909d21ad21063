"""Facts: boolean outcomes that carry the messages describing them.

A fact is either a leaf (one evaluated predicate with its four message
templates), a negation of another fact, or a composite joining two facts with
``&&`` or ``||``. Leaves are built with :func:`yes` and :func:`no`; negations
and composites only come from the combinators on :class:`Fact`::

    empty = no("{0} was not empty", "{0} was empty", args=["x"])
    sized = yes("{0} did not have size {1}", "{0} had size {1}", args=["x", 0])
    outcome = empty & (lambda: sized)
    outcome.deferred_rhs.is_forced      # False
    outcome.as_string                   # 'No("x" was not empty)'
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Sequence, Union

from factalgebra.deferred import Deferred, as_deferred
from factalgebra.formatting import format_message
from factalgebra.prettifier import Prettifier, default_prettifier

logger = logging.getLogger(__name__)


class FactOperator(str, Enum):
    AND = "&&"
    OR = "||"

    def __str__(self) -> str:
        return self.value


Operand = Union["Fact", Callable[[], "Fact"], Deferred["Fact"]]


class Fact(ABC):
    """Base of every fact variant.

    Subclasses fix the polarity through the ``is_yes`` class attribute.
    """

    is_yes: ClassVar[bool]

    @property
    def is_no(self) -> bool:
        return not self.is_yes

    @property
    @abstractmethod
    def complexity(self) -> int:
        """Number of leaves in the fact tree."""

    @property
    @abstractmethod
    def failure_message(self) -> str: ...

    @property
    @abstractmethod
    def negated_failure_message(self) -> str: ...

    @property
    @abstractmethod
    def mid_sentence_failure_message(self) -> str: ...

    @property
    @abstractmethod
    def mid_sentence_negated_failure_message(self) -> str: ...

    def negate(self) -> Fact:
        if self.is_yes:
            return NegatedToNo(self)
        return NegatedToYes(self)

    def and_(self, rhs: Operand) -> Fact:
        """Conjunction; *rhs* is only evaluated when this fact is Yes."""
        deferred = as_deferred(rhs)
        if not self.is_yes:
            logger.debug("&& short-circuited on a No left operand")
            return CompositeNo(FactOperator.AND, self, deferred)
        if deferred.force().is_yes:
            return CompositeYes(FactOperator.AND, self, deferred)
        return CompositeNo(FactOperator.AND, self, deferred)

    def or_(self, rhs: Operand) -> Fact:
        """Disjunction; *rhs* is only evaluated when this fact is No."""
        deferred = as_deferred(rhs)
        if self.is_yes:
            logger.debug("|| short-circuited on a Yes left operand")
            return CompositeYes(FactOperator.OR, self, deferred)
        if deferred.force().is_yes:
            return CompositeYes(FactOperator.OR, self, deferred)
        return CompositeNo(FactOperator.OR, self, deferred)

    def __and__(self, rhs: Operand) -> Fact:
        return self.and_(rhs)

    def __or__(self, rhs: Operand) -> Fact:
        return self.or_(rhs)

    def __invert__(self) -> Fact:
        return self.negate()

    def __bool__(self) -> bool:
        return self.is_yes

    @property
    def as_string(self) -> str:
        from factalgebra.render import render

        return render(self)

    def __str__(self) -> str:
        return self.as_string


@dataclass(frozen=True)
class LeafFact(Fact):
    """One evaluated predicate with its raw templates and arguments."""

    raw_failure_message: str
    raw_negated_failure_message: str
    raw_mid_sentence_failure_message: str
    raw_mid_sentence_negated_failure_message: str
    failure_message_args: tuple[Any, ...] = ()
    negated_failure_message_args: tuple[Any, ...] = ()
    mid_sentence_failure_message_args: tuple[Any, ...] = ()
    mid_sentence_negated_failure_message_args: tuple[Any, ...] = ()
    prettifier: Prettifier = field(default=default_prettifier, repr=False)

    @property
    def complexity(self) -> int:
        return 1

    @property
    def failure_message(self) -> str:
        return format_message(
            self.raw_failure_message, self.failure_message_args, self.prettifier
        )

    @property
    def negated_failure_message(self) -> str:
        return format_message(
            self.raw_negated_failure_message,
            self.negated_failure_message_args,
            self.prettifier,
        )

    @property
    def mid_sentence_failure_message(self) -> str:
        return format_message(
            self.raw_mid_sentence_failure_message,
            self.mid_sentence_failure_message_args,
            self.prettifier,
        )

    @property
    def mid_sentence_negated_failure_message(self) -> str:
        return format_message(
            self.raw_mid_sentence_negated_failure_message,
            self.mid_sentence_negated_failure_message_args,
            self.prettifier,
        )


class LeafYes(LeafFact):
    is_yes: ClassVar[bool] = True


class LeafNo(LeafFact):
    is_yes: ClassVar[bool] = False


@dataclass(frozen=True)
class NegatedFact(Fact):
    """Inverts the polarity of ``wrapped`` and swaps its message roles.

    The raw template and argument accessors are only meaningful when the
    wrapped fact has them, i.e. for a leaf or a negation of one.
    """

    wrapped: Fact

    @property
    def complexity(self) -> int:
        return self.wrapped.complexity

    @property
    def failure_message(self) -> str:
        return self.wrapped.negated_failure_message

    @property
    def negated_failure_message(self) -> str:
        return self.wrapped.failure_message

    @property
    def mid_sentence_failure_message(self) -> str:
        return self.wrapped.mid_sentence_negated_failure_message

    @property
    def mid_sentence_negated_failure_message(self) -> str:
        return self.wrapped.mid_sentence_failure_message

    @property
    def raw_failure_message(self) -> str:
        return self.wrapped.raw_negated_failure_message  # type: ignore[attr-defined]

    @property
    def raw_negated_failure_message(self) -> str:
        return self.wrapped.raw_failure_message  # type: ignore[attr-defined]

    @property
    def raw_mid_sentence_failure_message(self) -> str:
        return self.wrapped.raw_mid_sentence_negated_failure_message  # type: ignore[attr-defined]

    @property
    def raw_mid_sentence_negated_failure_message(self) -> str:
        return self.wrapped.raw_mid_sentence_failure_message  # type: ignore[attr-defined]

    @property
    def failure_message_args(self) -> tuple[Any, ...]:
        return self.wrapped.negated_failure_message_args  # type: ignore[attr-defined]

    @property
    def negated_failure_message_args(self) -> tuple[Any, ...]:
        return self.wrapped.failure_message_args  # type: ignore[attr-defined]

    @property
    def mid_sentence_failure_message_args(self) -> tuple[Any, ...]:
        return self.wrapped.mid_sentence_negated_failure_message_args  # type: ignore[attr-defined]

    @property
    def mid_sentence_negated_failure_message_args(self) -> tuple[Any, ...]:
        return self.wrapped.mid_sentence_failure_message_args  # type: ignore[attr-defined]

    @property
    def prettifier(self) -> Prettifier:
        return self.wrapped.prettifier  # type: ignore[attr-defined]


class NegatedToYes(NegatedFact):
    is_yes: ClassVar[bool] = True


class NegatedToNo(NegatedFact):
    is_yes: ClassVar[bool] = False


@dataclass(frozen=True, eq=False)
class CompositeFact(Fact):
    """Two facts joined by an operator.

    The right operand is kept deferred; it is forced only when its content is
    needed. Composites own no templates: their messages come from the
    renderer.
    """

    operator: FactOperator
    lhs: Fact
    deferred_rhs: Deferred[Fact]

    @property
    def rhs(self) -> Fact:
        return self.deferred_rhs.force()

    @property
    def complexity(self) -> int:
        return self.lhs.complexity + self.rhs.complexity

    @property
    def failure_message(self) -> str:
        from factalgebra.render import render

        return render(self)

    @property
    def negated_failure_message(self) -> str:
        from factalgebra.render import render

        return render(self.negate())

    @property
    def mid_sentence_failure_message(self) -> str:
        return self.failure_message

    @property
    def mid_sentence_negated_failure_message(self) -> str:
        return self.negated_failure_message


class CompositeYes(CompositeFact):
    is_yes: ClassVar[bool] = True


class CompositeNo(CompositeFact):
    is_yes: ClassVar[bool] = False


AnyFact = Union[LeafYes, LeafNo, NegatedToYes, NegatedToNo, CompositeYes, CompositeNo]


def _args(values: Sequence[Any] | None, default: tuple[Any, ...]) -> tuple[Any, ...]:
    if values is None:
        return default
    # A bare string is one argument, not a sequence of characters.
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _leaf(
    leaf_type: type[LeafFact],
    raw_failure_message: str,
    raw_negated_failure_message: str,
    raw_mid_sentence_failure_message: str | None,
    raw_mid_sentence_negated_failure_message: str | None,
    args: Sequence[Any] | None,
    failure_args: Sequence[Any] | None,
    negated_args: Sequence[Any] | None,
    mid_sentence_failure_args: Sequence[Any] | None,
    mid_sentence_negated_args: Sequence[Any] | None,
    prettifier: Prettifier,
) -> LeafFact:
    shared = _args(args, ())
    failure = _args(failure_args, shared)
    negated = _args(negated_args, shared)
    return leaf_type(
        raw_failure_message=raw_failure_message,
        raw_negated_failure_message=raw_negated_failure_message,
        raw_mid_sentence_failure_message=(
            raw_mid_sentence_failure_message
            if raw_mid_sentence_failure_message is not None
            else raw_failure_message
        ),
        raw_mid_sentence_negated_failure_message=(
            raw_mid_sentence_negated_failure_message
            if raw_mid_sentence_negated_failure_message is not None
            else raw_negated_failure_message
        ),
        failure_message_args=failure,
        negated_failure_message_args=negated,
        mid_sentence_failure_message_args=_args(mid_sentence_failure_args, failure),
        mid_sentence_negated_failure_message_args=_args(
            mid_sentence_negated_args, negated
        ),
        prettifier=prettifier,
    )


def yes(
    raw_failure_message: str,
    raw_negated_failure_message: str,
    raw_mid_sentence_failure_message: str | None = None,
    raw_mid_sentence_negated_failure_message: str | None = None,
    *,
    args: Sequence[Any] | None = None,
    failure_args: Sequence[Any] | None = None,
    negated_args: Sequence[Any] | None = None,
    mid_sentence_failure_args: Sequence[Any] | None = None,
    mid_sentence_negated_args: Sequence[Any] | None = None,
    prettifier: Prettifier = default_prettifier,
) -> LeafYes:
    """Build a Yes leaf.

    Mid-sentence templates default to the plain ones. ``args`` fills all four
    argument lists; ``failure_args``/``negated_args`` override it per role and
    the mid-sentence lists default to them.
    """
    return _leaf(  # type: ignore[return-value]
        LeafYes,
        raw_failure_message,
        raw_negated_failure_message,
        raw_mid_sentence_failure_message,
        raw_mid_sentence_negated_failure_message,
        args,
        failure_args,
        negated_args,
        mid_sentence_failure_args,
        mid_sentence_negated_args,
        prettifier,
    )


def no(
    raw_failure_message: str,
    raw_negated_failure_message: str,
    raw_mid_sentence_failure_message: str | None = None,
    raw_mid_sentence_negated_failure_message: str | None = None,
    *,
    args: Sequence[Any] | None = None,
    failure_args: Sequence[Any] | None = None,
    negated_args: Sequence[Any] | None = None,
    mid_sentence_failure_args: Sequence[Any] | None = None,
    mid_sentence_negated_args: Sequence[Any] | None = None,
    prettifier: Prettifier = default_prettifier,
) -> LeafNo:
    """Build a No leaf. Arguments default exactly as for :func:`yes`."""
    return _leaf(  # type: ignore[return-value]
        LeafNo,
        raw_failure_message,
        raw_negated_failure_message,
        raw_mid_sentence_failure_message,
        raw_mid_sentence_negated_failure_message,
        args,
        failure_args,
        negated_args,
        mid_sentence_failure_args,
        mid_sentence_negated_args,
        prettifier,
    )
