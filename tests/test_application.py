"""Tests for Application."""

import pytest

from chatflow.app import Application
from chatflow.config import Settings
from chatflow.gateway import LoggingGateway
from chatflow.models import AwaitingLanguage, TextMessage


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self):
        """Test that start wires all components."""
        app = Application(settings=Settings(), db_path=":memory:")
        await app.start()
        try:
            assert app._storage is not None
            assert app._router is not None
            assert app._commands is not None
            assert app._processor is not None
            assert app.processor.running
        finally:
            await app.stop()

    @pytest.mark.asyncio
    async def test_without_token_renders_to_log(self):
        """Test that no bot token means the logging gateway and no polling."""
        app = Application(settings=Settings(), db_path=":memory:")
        await app.start()
        try:
            assert isinstance(app._gateway, LoggingGateway)
            assert app._polling_task is None
        finally:
            await app.stop()

    @pytest.mark.asyncio
    async def test_router_and_commands_share_locks(self):
        """Test that admin resets and dialogue steps use the same lock map."""
        app = Application(settings=Settings(), db_path=":memory:")
        await app.start()
        try:
            assert app._router._locks is app._locks
            assert app._commands._locks is app._locks
        finally:
            await app.stop()

    @pytest.mark.asyncio
    async def test_injected_gateway_is_used(self, gateway):
        """Test that an explicit gateway wins over settings."""
        app = Application(
            settings=Settings(telegram_token="123:abc"), db_path=":memory:", gateway=gateway
        )
        await app.start()
        try:
            await app.processor.handle(TextMessage(conversation_id=1, sender_id=2, text="hi"))
            assert gateway.ops() == ["send"]
            assert app._polling_task is None
        finally:
            await app.stop()

    def test_properties_before_start(self):
        """Test that components are unavailable before start()."""
        app = Application(settings=Settings(), db_path=":memory:")
        with pytest.raises(RuntimeError, match="not started"):
            app.storage
        with pytest.raises(RuntimeError, match="not started"):
            app.processor


class TestApplicationRestart:
    """Tests for resuming after a process restart."""

    @pytest.mark.asyncio
    async def test_state_resumes_after_restart(self, tmp_path):
        """Test that a second application picks up where the first stopped."""
        db_path = str(tmp_path / "bot.db")

        first = Application(settings=Settings(), db_path=db_path)
        await first.start()
        await first.processor.handle(TextMessage(conversation_id=5, sender_id=6, text="hi"))
        await first.stop()

        second = Application(settings=Settings(), db_path=db_path)
        await second.start()
        try:
            assert await second.storage.get(5) == AwaitingLanguage(fresh=True)
        finally:
            await second.stop()


class TestSettings:
    """Tests for Settings.from_env()."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in ("TELEGRAM_BOT_TOKEN", "BOT_ADMIN_ID", "DATABASE_URL", "API_PORT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.telegram_token is None
        assert settings.admin_id == 364448153
        assert settings.api_port == 8000

    def test_overrides(self, monkeypatch):
        """Test values read from the environment."""
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", " 123:abc ")
        monkeypatch.setenv("BOT_ADMIN_ID", "42")
        monkeypatch.setenv("DATABASE_URL", ":memory:")
        settings = Settings.from_env()
        assert settings.telegram_token == "123:abc"
        assert settings.admin_id == 42
        assert settings.database_url == ":memory:"

    def test_bad_admin_id(self, monkeypatch):
        """Test that a non-numeric admin id fails fast."""
        monkeypatch.setenv("BOT_ADMIN_ID", "root")
        with pytest.raises(ValueError):
            Settings.from_env()
