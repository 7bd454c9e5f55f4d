"""Notification layer -- Telegram delivery and message formatting."""

from ratebot.notify.client import Notifier
from ratebot.notify.message import format_rate_message
from ratebot.notify.telegram import TelegramNotifier

__all__ = ["Notifier", "TelegramNotifier", "format_rate_message"]
