"""Tagging every test of a suite with class-level labels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Mapping, TypeVar

_CLASS_TAGS_ATTR = "__factalgebra_tags__"

C = TypeVar("C", bound=type)


def merge_tags(
    existing: Mapping[str, set[str]],
    test_names: Iterable[str],
    labels: Iterable[str],
) -> dict[str, set[str]]:
    """Add *labels* to the tag set of each test in *test_names*.

    Returns a new mapping; *existing* is not modified. With no labels the
    result equals *existing* and no entries are created.
    """
    merged = {name: set(tags) for name, tags in existing.items()}
    labels = set(labels)
    if not labels:
        return merged
    for name in test_names:
        merged.setdefault(name, set()).update(labels)
    return merged


def tag_class(*labels: str) -> Callable[[C], C]:
    """Class decorator recording labels that apply to every test in the class."""

    def decorate(cls: C) -> C:
        current = set(cls.__dict__.get(_CLASS_TAGS_ATTR, ()))
        setattr(cls, _CLASS_TAGS_ATTR, frozenset(current | set(labels)))
        return cls

    return decorate


def class_tags(cls: type) -> frozenset[str]:
    """Labels recorded with :func:`tag_class` on *cls* or its bases."""
    found: set[str] = set()
    for klass in cls.__mro__:
        found |= klass.__dict__.get(_CLASS_TAGS_ATTR, frozenset())
    return frozenset(found)


class TagAllTests(ABC):
    """Mixin adding the labels of :meth:`tag_all_tests_with` to every test's tags.

    Subclasses provide ``test_names``; a base class may provide its own
    ``tags`` mapping which is merged rather than replaced.
    """

    test_names: tuple[str, ...] = ()

    @abstractmethod
    def tag_all_tests_with(self) -> set[str]:
        """Labels added to every test of the suite."""
        ...

    @property
    def tags(self) -> dict[str, set[str]]:
        base = getattr(super(), "tags", {})
        return merge_tags(base, self.test_names, self.tag_all_tests_with())


class TagAllTestsWithClassTags(TagAllTests):
    """Takes the labels from class-level :func:`tag_class` decorators."""

    def tag_all_tests_with(self) -> set[str]:
        return set(class_tags(type(self)))
