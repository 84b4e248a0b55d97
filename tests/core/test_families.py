"""Tests for the maybe-NaN / not-NaN type mapping."""

import numpy as np
import pytest

from maybenan import (
    FLOAT32,
    FLOAT64,
    N32,
    N64,
    OPTIONAL,
    MaybeNan,
    NotNone,
    OptionalFamily,
    family_for,
    from_not_nan,
    from_not_nan_opt,
    from_not_nan_ref_opt,
    is_nan,
    optional_family,
    try_as_not_nan,
)

_INT_TYPES = [int, np.int8, np.int16, np.int32, np.int64, np.uint8, np.uint16, np.uint32, np.uint64]


def _bits(value, dtype):
    uint = np.uint32 if np.dtype(dtype).itemsize == 4 else np.uint64
    return int(np.array([value], dtype=dtype).view(uint)[0])


class TestProtocol:
    @pytest.mark.parametrize("family", [FLOAT32, FLOAT64, OPTIONAL, optional_family(int)])
    def test_families_satisfy_protocol(self, family):
        assert isinstance(family, MaybeNan)


class TestFloatFamily:
    @pytest.mark.parametrize("family", [FLOAT32, FLOAT64])
    def test_is_nan(self, family):
        assert family.is_nan(family.dtype.type("nan"))
        assert not family.is_nan(family.dtype.type(1.0))
        assert not family.is_nan(family.dtype.type("inf"))

    @pytest.mark.parametrize("family,not_nan_type", [(FLOAT32, N32), (FLOAT64, N64)])
    def test_try_as_not_nan(self, family, not_nan_type):
        assert family.try_as_not_nan(family.dtype.type("nan")) is None
        value = family.try_as_not_nan(family.dtype.type(2.5))
        assert isinstance(value, not_nan_type)
        assert value == 2.5

    def test_try_as_not_nan_rejects_non_numbers(self):
        with pytest.raises(TypeError, match="real number"):
            FLOAT64.try_as_not_nan("1.0")

    @pytest.mark.parametrize("family", [FLOAT32, FLOAT64])
    def test_round_trip_bits(self, rng, family):
        dtype = family.dtype
        values = np.concatenate(
            [rng.standard_normal(50).astype(dtype), np.array([0.0, -0.0, np.inf, -np.inf], dtype=dtype)]
        )
        values = np.concatenate([values, np.array([np.finfo(dtype).tiny, np.finfo(dtype).max], dtype=dtype)])
        for value in values:
            back = family.from_not_nan(family.try_as_not_nan(value))
            assert type(back) is dtype.type
            assert _bits(back, dtype) == _bits(value, dtype)

    @pytest.mark.parametrize("family,expected_bits", [(FLOAT32, 0x7FC00000), (FLOAT64, 0x7FF8000000000000)])
    def test_canonical_nan(self, family, expected_bits):
        nan = family.from_not_nan_opt(None)
        assert type(nan) is family.dtype.type
        assert _bits(nan, family.dtype) == expected_bits
        assert _bits(family.from_not_nan_ref_opt(None), family.dtype) == expected_bits

    def test_ref_opt_returns_shared_constant(self):
        assert FLOAT64.from_not_nan_ref_opt(None) is FLOAT64.from_not_nan_ref_opt(None)
        assert FLOAT32.from_not_nan_ref_opt(None) is FLOAT32.nan

    def test_opt_with_value(self):
        assert FLOAT64.from_not_nan_opt(N64(3.0)) == np.float64(3.0)
        assert FLOAT32.from_not_nan_ref_opt(N32(0.5)) == np.float32(0.5)

    def test_from_not_nan_rejects_other_types(self):
        with pytest.raises(TypeError, match="N64"):
            FLOAT64.from_not_nan(1.0)
        with pytest.raises(TypeError, match="N32"):
            FLOAT32.from_not_nan(N64(1.0))

    def test_exactly_one_of_is_nan_or_not_nan(self, rng):
        values = rng.standard_normal(20)
        values[::3] = np.nan
        for value in values:
            assert FLOAT64.is_nan(value) != (FLOAT64.try_as_not_nan(value) is not None)


class TestOptionalFamily:
    def test_is_nan(self):
        assert OPTIONAL.is_nan(None)
        assert not OPTIONAL.is_nan(0)

    def test_try_as_not_nan(self):
        assert OPTIONAL.try_as_not_nan(None) is None
        assert OPTIONAL.try_as_not_nan(4) == NotNone(4)

    @pytest.mark.parametrize("value_type", _INT_TYPES)
    def test_registered_integer_families_round_trip(self, value_type):
        family = optional_family(value_type)
        value = value_type(7)
        wrapped = family.try_as_not_nan(value)
        assert isinstance(wrapped, NotNone)
        back = family.from_not_nan(wrapped)
        assert back == value
        assert type(back) is value_type

    @pytest.mark.parametrize("value_type", [N32, N64])
    def test_registered_ordered_float_families(self, value_type):
        family = optional_family(value_type)
        wrapped = family.try_as_not_nan(value_type(1.25))
        assert wrapped.unwrap() == 1.25
        assert family.from_not_nan_opt(None) is None

    def test_value_type_checked(self):
        with pytest.raises(TypeError, match="int8"):
            optional_family(np.int8).try_as_not_nan(3)

    @pytest.mark.parametrize("family", [OPTIONAL] + [optional_family(t) for t in [*_INT_TYPES, N32, N64]])
    def test_canonical_absent(self, family):
        assert family.from_not_nan_opt(None) is None
        assert family.from_not_nan_ref_opt(None) is None

    def test_from_not_nan_rejects_raw_values(self):
        with pytest.raises(TypeError, match="NotNone"):
            OPTIONAL.from_not_nan(3)

    def test_from_not_nan_checks_value_type(self):
        with pytest.raises(TypeError, match=r"NotNone\[int\]"):
            optional_family(int).from_not_nan(NotNone("x"))
        assert OPTIONAL.from_not_nan(NotNone("x")) == "x"

    @pytest.mark.parametrize("family", [OPTIONAL, optional_family(int)])
    def test_float_nan_is_absent(self, family):
        assert family.is_nan(float("nan"))
        assert family.is_nan(np.float32("nan"))
        assert family.try_as_not_nan(float("nan")) is None
        assert OPTIONAL.try_as_not_nan(1.5) == NotNone(1.5)

    def test_unknown_value_type(self):
        with pytest.raises(TypeError, match="No optional family"):
            optional_family(str)

    def test_repr(self):
        assert repr(optional_family(int)) == "OptionalFamily(int)"
        assert repr(FLOAT32) == "FloatFamily(float32)"


class TestFamilyFor:
    @pytest.mark.parametrize(
        "obj,expected",
        [
            (np.zeros(2, dtype=np.float32), FLOAT32),
            (np.zeros(2), FLOAT64),
            (np.dtype("float64"), FLOAT64),
            ("float32", FLOAT32),
            (float, FLOAT64),
            (np.float32, FLOAT32),
            (np.empty(2, dtype=object), OPTIONAL),
        ],
    )
    def test_resolves(self, obj, expected):
        assert family_for(obj) is expected

    @pytest.mark.parametrize("value_type", [int, np.int16, N64])
    def test_value_types_resolve_to_optional(self, value_type):
        family = family_for(value_type)
        assert isinstance(family, OptionalFamily)
        assert family.value_type is value_type

    @pytest.mark.parametrize("dtype", [np.int64, np.bool_, np.complex128, np.float16, "U3"])
    def test_rejects_dtypes_without_nan(self, dtype):
        with pytest.raises(TypeError):
            family_for(np.zeros(2, dtype=dtype))


class TestModuleFunctions:
    def test_is_nan_infers_family(self):
        assert is_nan(float("nan"))
        assert is_nan(np.float32("nan"))
        assert is_nan(None)
        assert not is_nan(1.0)
        assert not is_nan(3)

    def test_try_as_not_nan_infers_family(self):
        assert isinstance(try_as_not_nan(1.0), N64)
        assert isinstance(try_as_not_nan(np.float32(1.0)), N32)
        assert try_as_not_nan(5) == NotNone(5)
        assert try_as_not_nan(float("nan")) is None

    def test_from_not_nan_infers_family(self):
        assert type(from_not_nan(N32(1.0))) is np.float32
        assert type(from_not_nan(N64(1.0))) is np.float64
        assert from_not_nan(NotNone(3)) == 3

    def test_ordered_float_infers_float_family(self):
        assert isinstance(try_as_not_nan(N64(2.0)), N64)
        assert not is_nan(N64(2.0))

    def test_explicit_family(self):
        assert isinstance(try_as_not_nan(1.0, family=FLOAT32), N32)

    def test_opt_functions_take_family(self):
        assert np.isnan(from_not_nan_opt(None, FLOAT64))
        assert from_not_nan_opt(None, OPTIONAL) is None
        assert from_not_nan_ref_opt(None, FLOAT32) is FLOAT32.nan
