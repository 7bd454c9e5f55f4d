"""Rate source layer -- page fetching and the HTML parsing contract."""

from ratebot.source.client import RateSource
from ratebot.source.parser import parse_decimal, parse_rate
from ratebot.source.rico_client import RicoClient

__all__ = ["RateSource", "RicoClient", "parse_decimal", "parse_rate"]
