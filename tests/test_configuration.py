"""Tests for property check configuration resolution."""

import textwrap

import pytest
from pydantic import ValidationError

from factalgebra.prop.configuration import (
    ConfigArityError,
    MaxSize,
    Parameters,
    PropertyCheckConfig,
    PropertyCheckConfiguration,
    get_params,
    load_property_config,
    max_discarded,
    max_discarded_factor,
    max_size,
    min_size,
    min_successful,
    workers,
)


def test_defaults():
    params = get_params([], PropertyCheckConfiguration())
    assert params == Parameters(
        min_successful_tests=100,
        min_size=0,
        max_size=100,
        workers=1,
        max_discard_ratio=5.0,
    )


def test_overrides_replace_defaults():
    params = get_params(
        [min_successful(10), min_size(2), max_size(20), workers(4)],
        PropertyCheckConfiguration(),
    )
    assert params.min_successful_tests == 10
    assert params.min_size == 2
    assert params.max_size == 20
    assert params.workers == 4


def test_max_size_derived_from_config():
    config = PropertyCheckConfiguration(min_size=10, size_range=20)
    assert get_params([], config).max_size == 30


def test_max_size_override_takes_precedence():
    config = PropertyCheckConfiguration(min_size=10, size_range=20)
    assert get_params([max_size(50)], config).max_size == 50


def test_min_size_override_does_not_shift_derived_max():
    config = PropertyCheckConfiguration(min_size=10, size_range=20)
    params = get_params([min_size(5)], config)
    assert params.min_size == 5
    assert params.max_size == 30


def test_max_discarded_factor_override():
    params = get_params([max_discarded_factor(2.5)], PropertyCheckConfiguration())
    assert params.max_discard_ratio == 2.5


def test_max_discarded_override_is_converted_to_ratio():
    params = get_params(
        [min_successful(10), max_discarded(19)], PropertyCheckConfiguration()
    )
    assert params.max_discard_ratio == 2.0


# --- arity ---


@pytest.mark.parametrize(
    "params, kind",
    [
        ([min_successful(1), min_successful(2)], "MinSuccessful"),
        ([max_discarded(1), max_discarded_factor(1.0)], "MaxDiscarded or MaxDiscardedFactor"),
        ([min_size(1), min_size(2)], "MinSize"),
        ([max_size(1), max_size(2), max_size(3)], "MaxSize"),
        ([workers(1), workers(2)], "Workers"),
    ],
)
def test_duplicate_params_raise_arity_error(params, kind):
    with pytest.raises(ConfigArityError) as exc_info:
        get_params(params, PropertyCheckConfiguration())
    assert f"can pass at most one {kind} config parameters" in str(exc_info.value)
    assert f"but {len(params)} were passed" in str(exc_info.value)


@pytest.mark.parametrize(
    "make, value",
    [
        (min_successful, 0),
        (max_discarded, -1),
        (max_discarded_factor, -0.5),
        (min_size, -1),
        (max_size, -1),
        (workers, 0),
    ],
)
def test_malformed_values_raise_on_construction(make, value):
    with pytest.raises(ValidationError):
        make(value)


def test_arity_error_is_not_a_validation_error():
    assert not issubclass(ConfigArityError, ValidationError)


def test_params_are_immutable():
    param = MaxSize(value=3)
    with pytest.raises(ValidationError):
        param.value = 4


# --- legacy configuration ---


def test_legacy_config_conversion():
    config = PropertyCheckConfig(min_successful=10, max_discarded=49, min_size=5, max_size=25)
    converted = config.to_configuration()
    assert converted.max_discarded_factor == 5.0
    assert converted.size_range == 20
    assert converted.legacy_max_discarded == 49


def test_legacy_config_min_above_max_rejected():
    with pytest.raises(ValidationError, match="min_size had value 30"):
        PropertyCheckConfig(min_size=30, max_size=10)


def test_legacy_max_discarded_recomputed_for_min_successful_override():
    config = PropertyCheckConfig(min_successful=10, max_discarded=49)
    params = get_params([min_successful(50)], config)
    assert params.max_discard_ratio == 1.0


def test_legacy_without_overrides_uses_converted_factor():
    config = PropertyCheckConfig(min_successful=10, max_discarded=49)
    assert get_params([], config).max_discard_ratio == 5.0


def test_legacy_explicit_factor_wins():
    config = PropertyCheckConfig(min_successful=10, max_discarded=49)
    params = get_params([min_successful(50), max_discarded_factor(3.0)], config)
    assert params.max_discard_ratio == 3.0


# --- YAML loading ---


def test_load_property_config(tmp_path):
    path = tmp_path / "props.yaml"
    path.write_text(textwrap.dedent("""\
        defaults:
          min_successful: 20
          size_range: 50
        overrides:
          - workers: 2
          - max_size: 10
    """))
    params = load_property_config(path)
    assert params.min_successful_tests == 20
    assert params.workers == 2
    assert params.max_size == 10
    assert params.to_dict()["max_discard_ratio"] == 5.0


def test_load_property_config_legacy(tmp_path):
    path = tmp_path / "props.yaml"
    path.write_text(textwrap.dedent("""\
        legacy:
          min_successful: 10
          max_discarded: 49
        overrides:
          - min_successful: 50
    """))
    assert load_property_config(path).max_discard_ratio == 1.0


def test_load_property_config_duplicate_override(tmp_path):
    path = tmp_path / "props.yaml"
    path.write_text("overrides:\n  - workers: 2\n  - workers: 3\n")
    with pytest.raises(ConfigArityError):
        load_property_config(path)


def test_load_property_config_unknown_override(tmp_path):
    path = tmp_path / "props.yaml"
    path.write_text("overrides:\n  - colour: 2\n")
    with pytest.raises(ValueError, match="Unknown override 'colour'"):
        load_property_config(path)


def test_load_property_config_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "props.yaml"
    path.write_text("")
    assert load_property_config(path) == get_params([], PropertyCheckConfiguration())
