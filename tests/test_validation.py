"""
Tests for request validation and rounding helpers.
"""

import math

import pytest

from realestate_api.calculations.validation import (
    ValidationError,
    missing_fields,
    require_fields,
    require_positive,
    round_currency,
)


class TestRequireFields:
    """Test required-field checks."""

    def test_all_present(self):
        """Present, non-zero fields pass, negatives included."""
        require_fields({"noi": -100, "purchasePrice": 1}, ["noi", "purchasePrice"])

    def test_missing_field(self):
        """Test a missing field is reported by name."""
        with pytest.raises(ValidationError) as exc_info:
            require_fields({"noi": 50000}, ["noi", "annualDebtService"])

        assert exc_info.value.fields == ["annualDebtService"]
        assert exc_info.value.message == "Missing required fields (noi, annualDebtService)"

    def test_zero_counts_as_missing(self):
        """A zero value is rejected the same way as an absent one."""
        with pytest.raises(ValidationError) as exc_info:
            require_fields({"annualCashflow": 0, "totalCashInvested": None},
                           ["annualCashflow", "totalCashInvested"])

        assert exc_info.value.fields == ["annualCashflow", "totalCashInvested"]

    def test_custom_message(self):
        """Test a caller-supplied message replaces the default."""
        with pytest.raises(ValidationError, match="Missing fields"):
            require_fields({}, ["loanAmount"], message="Missing fields (loanAmount)")

    def test_missing_fields_keeps_order(self):
        """Test missing fields are listed in declaration order."""
        record = {"b": 1}
        assert missing_fields(record, ["c", "b", "a"]) == ["c", "a"]

    def test_is_value_error(self):
        """ValidationError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            require_fields({}, ["noi"])


class TestRequirePositive:
    """Test positivity constraints."""

    def test_positive_passes(self):
        """Test positive values pass."""
        require_positive({"loanAmount": 1, "termYears": 0.5}, ["loanAmount", "termYears"])

    @pytest.mark.parametrize("value", [0, -1, -0.01, None])
    def test_non_positive_fails(self, value):
        """Test zero, negative and absent values fail."""
        with pytest.raises(ValidationError) as exc_info:
            require_positive({"purchasePrice": value}, ["purchasePrice"])

        assert exc_info.value.fields == ["purchasePrice"]
        assert "purchasePrice" in exc_info.value.message


class TestRoundCurrency:
    """Test output rounding."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (6.000000000000001, 6.0),
            (1.005, 1.01),
            (2.675, 2.68),
            (-1.005, -1.01),
            (8606.642970, 8606.64),
            (33.333333, 33.33),
            (7.499999999999999, 7.5),
        ],
    )
    def test_rounds_half_away_from_zero(self, value, expected):
        """Test rounding to 2 decimals."""
        assert round_currency(value) == expected

    def test_none_passes_through(self):
        """Test None is returned unchanged."""
        assert round_currency(None) is None

    def test_no_negative_zero(self):
        """Tiny negative values round to positive zero."""
        result = round_currency(-0.0001)
        assert result == 0.0
        assert math.copysign(1, result) == 1

    def test_returns_float(self):
        """Test integers come back as floats."""
        assert isinstance(round_currency(5), float)

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_rejected(self, value):
        """Infinite and NaN results are reported as validation errors."""
        with pytest.raises(ValidationError, match="not a finite number"):
            round_currency(value)

    def test_large_finite_value(self):
        """Values far beyond the default decimal precision still round."""
        assert round_currency(1e300) == 1e300
        assert round_currency(-1.5e308) == -1.5e308

    def test_integer_beyond_float_range(self):
        """Integer results too large for a float are rejected."""
        with pytest.raises(ValidationError):
            round_currency(3 * 10 ** 308)
