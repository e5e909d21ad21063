"""Configuration for randomized property checks.

A :class:`PropertyCheckConfiguration` holds the defaults; callers may pass
override params (:class:`MinSuccessful`, :class:`MaxSize`, ...) that
:func:`get_params` folds into the effective :class:`Parameters`.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Iterable

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
    model_validator,
)

logger = logging.getLogger(__name__)


class ConfigArityError(ValueError):
    """More than one override of the same kind was passed."""


def calculate_max_discarded_factor(min_successful: int, max_discarded: int) -> float:
    return (max_discarded + 1) / min_successful


class PropertyCheckConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    min_successful: PositiveInt = 100
    max_discarded_factor: NonNegativeFloat = 5.0
    min_size: NonNegativeInt = 0
    size_range: NonNegativeInt = 100
    workers: PositiveInt = 1
    # Set only when converted from a legacy PropertyCheckConfig.
    legacy_max_discarded: NonNegativeInt | None = None


class PropertyCheckConfig(BaseModel):
    """Legacy configuration expressed with absolute discard and size limits."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    min_successful: PositiveInt = 100
    max_discarded: NonNegativeInt = 500
    min_size: NonNegativeInt = 0
    max_size: NonNegativeInt = 100
    workers: PositiveInt = 1

    @model_validator(mode="after")
    def min_size_not_above_max_size(self) -> PropertyCheckConfig:
        if self.min_size > self.max_size:
            raise ValueError(
                f"min_size had value {self.min_size}, which must be less than or "
                f"equal to max_size, which had value {self.max_size}"
            )
        return self

    def to_configuration(self) -> PropertyCheckConfiguration:
        return PropertyCheckConfiguration(
            min_successful=self.min_successful,
            max_discarded_factor=calculate_max_discarded_factor(
                self.min_successful, self.max_discarded
            ),
            min_size=self.min_size,
            size_range=self.max_size - self.min_size,
            workers=self.workers,
            legacy_max_discarded=self.max_discarded,
        )


class PropertyCheckConfigParam(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Params sharing a kind may not be passed together.
    kind: ClassVar[str]


class MinSuccessful(PropertyCheckConfigParam):
    value: PositiveInt
    kind: ClassVar[str] = "MinSuccessful"


class MaxDiscarded(PropertyCheckConfigParam):
    value: NonNegativeInt
    kind: ClassVar[str] = "MaxDiscarded or MaxDiscardedFactor"


class MaxDiscardedFactor(PropertyCheckConfigParam):
    value: NonNegativeFloat
    kind: ClassVar[str] = "MaxDiscarded or MaxDiscardedFactor"


class MinSize(PropertyCheckConfigParam):
    value: NonNegativeInt
    kind: ClassVar[str] = "MinSize"


class MaxSize(PropertyCheckConfigParam):
    value: NonNegativeInt
    kind: ClassVar[str] = "MaxSize"


class Workers(PropertyCheckConfigParam):
    value: PositiveInt
    kind: ClassVar[str] = "Workers"


def min_successful(value: int) -> MinSuccessful:
    return MinSuccessful(value=value)


def max_discarded(value: int) -> MaxDiscarded:
    return MaxDiscarded(value=value)


def max_discarded_factor(value: float) -> MaxDiscardedFactor:
    return MaxDiscardedFactor(value=value)


def min_size(value: int) -> MinSize:
    return MinSize(value=value)


def max_size(value: int) -> MaxSize:
    return MaxSize(value=value)


def workers(value: int) -> Workers:
    return Workers(value=value)


_PARAM_TYPES: dict[str, type[PropertyCheckConfigParam]] = {
    "min_successful": MinSuccessful,
    "max_discarded": MaxDiscarded,
    "max_discarded_factor": MaxDiscardedFactor,
    "min_size": MinSize,
    "max_size": MaxSize,
    "workers": Workers,
}


@dataclass(frozen=True)
class Parameters:
    """Effective parameters handed to the property evaluator."""

    min_successful_tests: int
    min_size: int
    max_size: int
    workers: int
    max_discard_ratio: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_successful_tests": self.min_successful_tests,
            "min_size": self.min_size,
            "max_size": self.max_size,
            "workers": self.workers,
            "max_discard_ratio": self.max_discard_ratio,
        }


def _last(params: Iterable[PropertyCheckConfigParam], param_type: type) -> Any:
    found = [p for p in params if isinstance(p, param_type)]
    return found[-1].value if found else None


def get_params(
    params: Iterable[PropertyCheckConfigParam],
    config: PropertyCheckConfiguration | PropertyCheckConfig,
) -> Parameters:
    """Combine override *params* with *config* into effective parameters.

    Raises ConfigArityError when more than one param of a kind is passed;
    MaxDiscarded and MaxDiscardedFactor count as the same kind.
    """
    params = list(params)
    if isinstance(config, PropertyCheckConfig):
        config = config.to_configuration()

    counts = Counter(p.kind for p in params)
    for kind in (
        "MinSuccessful",
        "MaxDiscarded or MaxDiscardedFactor",
        "MinSize",
        "MaxSize",
        "Workers",
    ):
        if counts[kind] > 1:
            raise ConfigArityError(
                f"can pass at most one {kind} config parameters, "
                f"but {counts[kind]} were passed"
            )

    min_successful_override = _last(params, MinSuccessful)
    max_discarded_override = _last(params, MaxDiscarded)
    factor_override = _last(params, MaxDiscardedFactor)
    min_size_override = _last(params, MinSize)
    max_size_override = _last(params, MaxSize)
    workers_override = _last(params, Workers)

    min_successful_tests = (
        min_successful_override
        if min_successful_override is not None
        else config.min_successful
    )

    use_legacy_max_discarded = (
        config.legacy_max_discarded is not None
        and counts["MinSuccessful"] == 1
        and counts["MaxDiscarded or MaxDiscardedFactor"] == 0
    )
    if use_legacy_max_discarded:
        max_discard_ratio = calculate_max_discarded_factor(
            min_successful_tests, config.legacy_max_discarded  # type: ignore[arg-type]
        )
    elif factor_override is not None:
        max_discard_ratio = float(factor_override)
    elif max_discarded_override is not None:
        max_discard_ratio = calculate_max_discarded_factor(
            min_successful_tests, max_discarded_override
        )
    else:
        max_discard_ratio = config.max_discarded_factor

    result = Parameters(
        min_successful_tests=min_successful_tests,
        min_size=min_size_override if min_size_override is not None else config.min_size,
        max_size=(
            max_size_override
            if max_size_override is not None
            else config.min_size + config.size_range
        ),
        workers=workers_override if workers_override is not None else config.workers,
        max_discard_ratio=max_discard_ratio,
    )
    logger.debug(f"Resolved property check parameters: {result}")
    return result


class PropertyConfigFile(BaseModel):
    model_config = ConfigDict(extra="forbid")
    defaults: PropertyCheckConfiguration = PropertyCheckConfiguration()
    legacy: PropertyCheckConfig | None = None
    overrides: list[dict[str, int | float]] = []

    @model_validator(mode="after")
    def defaults_or_legacy(self) -> PropertyConfigFile:
        if self.legacy is not None and "defaults" in self.model_fields_set:
            raise ValueError("defaults and legacy must not both be given")
        return self

    def configuration(self) -> PropertyCheckConfiguration:
        if self.legacy is not None:
            return self.legacy.to_configuration()
        return self.defaults

    def params(self) -> list[PropertyCheckConfigParam]:
        result: list[PropertyCheckConfigParam] = []
        for item in self.overrides:
            if len(item) != 1:
                raise ValueError(
                    f"Each override must have exactly one key, got {sorted(item)}"
                )
            ((name, value),) = item.items()
            if name not in _PARAM_TYPES:
                raise ValueError(f"Unknown override '{name}'")
            result.append(_PARAM_TYPES[name](value=value))
        return result


def load_property_config(path: Path) -> Parameters:
    """Load defaults and overrides from a YAML file and resolve them."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config_file = PropertyConfigFile(**raw)
    return get_params(config_file.params(), config_file.configuration())
