"""Tests for the Rate value object."""

from decimal import Decimal

import pytest

from ratebot.exceptions import InvalidRateError
from ratebot.models import Rate


class TestRate:
    def test_zero_is_unknown_and_invalid(self) -> None:
        assert Rate.zero() == Rate()
        assert Rate.zero().is_valid is False

    def test_equality_is_exact_numeric(self) -> None:
        assert Rate(Decimal("2.70"), Decimal("2.75")) == Rate(
            Decimal("2.7000"), Decimal("2.7500")
        )
        assert Rate(Decimal("2.7000"), Decimal("2.7500")) != Rate(
            Decimal("2.7000"), Decimal("2.75001")
        )

    @pytest.mark.parametrize(
        ("buy", "sell"),
        [("0", "2.75"), ("2.70", "0"), ("0", "0")],
    )
    def test_any_zero_side_is_invalid(self, buy: str, sell: str) -> None:
        rate = Rate(Decimal(buy), Decimal(sell))
        assert rate.is_valid is False
        with pytest.raises(InvalidRateError):
            rate.validate()

    def test_validate_returns_self(self, first_rate: Rate) -> None:
        assert first_rate.validate() is first_rate

    def test_immutable(self, first_rate: Rate) -> None:
        with pytest.raises(AttributeError):
            first_rate.buy = Decimal("1")  # type: ignore[misc]
