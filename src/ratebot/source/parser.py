"""HTML contract of the rate page.

The page lists currencies as rows of a table body, USD first. Inside the USD
row the numeric cells carry a marker class: the first is the buy rate, the
second the sell rate. Cell text may use a comma as the decimal separator.

Everything that depends on the site's markup lives here, so a markup change
means touching this module (or the two selector settings) only.
"""

import re
from decimal import Decimal, InvalidOperation

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from ratebot.exceptions import ParseError
from ratebot.logging import get_logger
from ratebot.models import Rate

logger = get_logger(__name__)

DEFAULT_ROW_SELECTOR = "table tbody tr"
DEFAULT_CELL_CLASS = "currency-rate"

_RATE_FIELDS = ("buy", "sell")
_WHITESPACE = re.compile(r"\s+")


def parse_decimal(text: str) -> Decimal:
    """Parse a rate cell into a non-negative Decimal.

    Whitespace (including non-breaking spaces) is dropped and a comma decimal
    separator is normalised to a period: " 2,7150 " -> Decimal("2.7150").

    Raises:
        ParseError: if the text is empty, not a finite number, or negative.
    """
    cleaned = _WHITESPACE.sub("", text).replace(",", ".")
    if not cleaned:
        raise ParseError("empty rate cell")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ParseError(f"non-numeric rate cell: {text!r}") from exc
    if not value.is_finite() or value < 0:
        raise ParseError(f"rate cell out of range: {text!r}")
    return value


def parse_rate(
    html: str,
    row_selector: str = DEFAULT_ROW_SELECTOR,
    cell_class: str = DEFAULT_CELL_CLASS,
) -> Rate:
    """Extract the USD buy/sell rate from the page HTML.

    Never raises for markup problems: a malformed row selector, a missing
    row, a missing cell or unparsable text leaves the affected value at zero
    and is logged. The caller rejects the result as invalid.
    """
    soup = BeautifulSoup(html, "html.parser")

    try:
        row = soup.select_one(row_selector)
    except SelectorSyntaxError as exc:
        logger.error("rate_row_selector_invalid", selector=row_selector, error=str(exc))
        return Rate.zero()
    if row is None:
        logger.warning("rate_row_not_found", selector=row_selector)
        return Rate.zero()

    cells = row.find_all(class_=cell_class)
    values: dict[str, Decimal] = {}
    for index, field in enumerate(_RATE_FIELDS):
        if index >= len(cells):
            logger.warning(
                "rate_cell_missing",
                field=field,
                cell_class=cell_class,
                found=len(cells),
            )
            continue
        text = cells[index].get_text(strip=True)
        try:
            values[field] = parse_decimal(text)
        except ParseError as exc:
            logger.warning("rate_cell_unparsable", field=field, error=str(exc))

    return Rate(**values)
