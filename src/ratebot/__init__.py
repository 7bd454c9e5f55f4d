"""USD exchange-rate watcher that posts changes to a Telegram channel."""
