"""Shared test fixtures for the rate bot."""

from decimal import Decimal

import pytest

from ratebot.config import AppSettings, SourceSettings, TelegramSettings
from ratebot.models import Rate


def make_rate_page(
    buy: str | None = "2,7000",
    sell: str | None = "2,7500",
    cell_class: str = "currency-rate",
) -> str:
    """Return an HTML page shaped like the source site's rate table.

    Passing None for buy or sell omits that cell from the USD row.
    """
    cells = "".join(
        f'<td class="{cell_class}">{value}</td>'
        for value in (buy, sell)
        if value is not None
    )
    return f"""
    <html><body>
    <table class="rates">
      <thead><tr><th>Currency</th><th>Buy</th><th>Sell</th></tr></thead>
      <tbody>
        <tr><td class="code">USD</td>{cells}</tr>
        <tr><td class="code">EUR</td>
            <td class="{cell_class}">2,9500</td>
            <td class="{cell_class}">3,0100</td></tr>
      </tbody>
    </table>
    </body></html>
    """


@pytest.fixture
def telegram_settings() -> TelegramSettings:
    return TelegramSettings(
        bot_token="123456:test-token",  # type: ignore[arg-type]
        channel_id="@test_channel",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def source_settings() -> SourceSettings:
    return SourceSettings(
        url="https://rates.example.test/ka",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def mock_settings(
    telegram_settings: TelegramSettings, source_settings: SourceSettings
) -> AppSettings:
    """Return AppSettings with test defaults (dummy token and channel)."""
    return AppSettings(
        log_level="DEBUG",
        telegram=telegram_settings,
        source=source_settings,
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def first_rate() -> Rate:
    return Rate(Decimal("2.7000"), Decimal("2.7500"))


@pytest.fixture
def rate_page():
    """Factory fixture for rate page HTML (see make_rate_page)."""
    return make_rate_page
