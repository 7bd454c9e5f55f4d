"""Tests for component wiring, signal handling and startup failures."""

import asyncio
import signal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ratebot.checker import RateChecker
from ratebot.config import AppSettings
from ratebot.main import _build_components, _setup_signal_handlers, load_settings, run
from ratebot.notify.telegram import TelegramNotifier
from ratebot.scheduler import RateScheduler
from ratebot.source.rico_client import RicoClient


class TestBuildComponents:
    def test_wires_all_components(self, mock_settings: AppSettings) -> None:
        components = _build_components(mock_settings)
        try:
            assert isinstance(components["source"], RicoClient)
            assert isinstance(components["notifier"], TelegramNotifier)
            assert isinstance(components["checker"], RateChecker)
            assert isinstance(components["scheduler"], RateScheduler)
        finally:
            components["session"].close()

    def test_source_and_notifier_share_session(self, mock_settings: AppSettings) -> None:
        components = _build_components(mock_settings)
        try:
            assert components["source"]._session is components["session"]
            assert components["notifier"]._session is components["session"]
        finally:
            components["session"].close()


class TestSignalHandlers:
    @pytest.mark.asyncio
    async def test_sigterm_and_sigint_stop_scheduler(self) -> None:
        scheduler = MagicMock(spec=RateScheduler)
        loop = asyncio.get_running_loop()
        with patch.object(loop, "add_signal_handler") as add_handler:
            _setup_signal_handlers(scheduler)

        registered = {call.args[0] for call in add_handler.call_args_list}
        assert registered == {signal.SIGINT, signal.SIGTERM}

        callback, sig = add_handler.call_args_list[0].args[1:]
        callback(sig)
        scheduler.stop.assert_called_once()


class TestRun:
    @pytest.mark.asyncio
    async def test_closes_resources_after_scheduler_exits(
        self, mock_settings: AppSettings
    ) -> None:
        components = {
            "session": MagicMock(),
            "source": AsyncMock(),
            "notifier": AsyncMock(),
            "checker": MagicMock(),
            "scheduler": AsyncMock(),
        }
        with (
            patch("ratebot.main._build_components", return_value=components),
            patch("ratebot.main._setup_signal_handlers") as setup_handlers,
        ):
            await run(mock_settings)

        setup_handlers.assert_called_once_with(components["scheduler"])
        components["scheduler"].run.assert_awaited_once()
        components["source"].close.assert_awaited_once()
        components["notifier"].close.assert_awaited_once()
        components["session"].close.assert_called_once()


class TestLoadSettings:
    def test_missing_configuration_exits_non_zero(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        monkeypatch.delenv("TELEGRAM_CHANNEL_ID", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            load_settings()
        assert exc_info.value.code == 1

    def test_valid_configuration_loads(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
        monkeypatch.setenv("TELEGRAM_CHANNEL_ID", "@rates")
        monkeypatch.delenv("SOURCE_TIMEZONE", raising=False)

        settings = load_settings()
        assert settings.telegram.channel_id == "@rates"
