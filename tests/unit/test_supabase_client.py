"""Unit tests for the Supabase client binding."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from tests.helpers import make_response
from wormhole.core import supabase as binding


@pytest.fixture(autouse=True)
def released_client() -> Generator[None, None, None]:
    """Make sure every test starts and ends without a process-wide client."""
    binding.shutdown_supabase_client()
    yield
    binding.shutdown_supabase_client()


class TestClientFactories:
    """Tests for client construction."""

    def test_create_supabase_client_keeps_session(self, test_settings: Any) -> None:
        """Test that the process-wide client persists and refreshes its session."""
        with patch("wormhole.core.supabase.create_client") as mock_create:
            binding.create_supabase_client(test_settings)

        args, kwargs = mock_create.call_args
        assert args == (test_settings.supabase_url, test_settings.supabase_anon_key)
        assert kwargs["options"].persist_session is True
        assert kwargs["options"].auto_refresh_token is True

    def test_create_auth_client_is_isolated(self, test_settings: Any) -> None:
        """Test that per-request clients neither persist nor refresh."""
        with patch("wormhole.core.supabase.create_client") as mock_create:
            binding.create_auth_client(test_settings)

        options = mock_create.call_args.kwargs["options"]
        assert options.persist_session is False
        assert options.auto_refresh_token is False

    def test_close_auth_client(self) -> None:
        client = MagicMock()

        binding.close_auth_client(client)

        client.auth.close.assert_called_once()
        client.postgrest.aclose.assert_called_once()

    def test_close_auth_client_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a failed close does not raise."""
        client = MagicMock()
        client.auth.close.side_effect = RuntimeError("already closed")

        binding.close_auth_client(client)

        assert "Failed to close" in caplog.text


class TestLifecycle:
    """Tests for init/get/shutdown."""

    def test_get_before_init_raises(self) -> None:
        with pytest.raises(RuntimeError):
            binding.get_supabase_client()

    def test_init_then_get(self, test_settings: Any) -> None:
        client = MagicMock()
        with patch("wormhole.core.supabase.create_supabase_client", return_value=client) as mock_create:
            assert binding.init_supabase_client(test_settings) is client
            assert binding.init_supabase_client(test_settings) is client

        mock_create.assert_called_once()
        assert binding.get_supabase_client() is client

    def test_shutdown_releases_client(self, test_settings: Any) -> None:
        with patch("wormhole.core.supabase.create_supabase_client", return_value=MagicMock()):
            binding.init_supabase_client(test_settings)

        binding.shutdown_supabase_client()

        with pytest.raises(RuntimeError):
            binding.get_supabase_client()


class TestResponseHelpers:
    """Tests for single_row and first_row."""

    def test_single_row(self) -> None:
        assert binding.single_row(make_response({"id": 1})) == {"id": 1}
        assert binding.single_row(make_response(None)) is None
        assert binding.single_row(None) is None

    def test_first_row(self) -> None:
        assert binding.first_row(make_response([{"id": 1}, {"id": 2}])) == {"id": 1}
        assert binding.first_row(make_response([])) is None
        assert binding.first_row(None) is None


class TestCheckDatabaseConnection:
    """Tests for check_database_connection."""

    @pytest.mark.asyncio
    async def test_healthy(self) -> None:
        client = MagicMock()

        assert await binding.check_database_connection(client) == {"healthy": True}
        client.table.assert_called_once_with("public_profile_cards")

    @pytest.mark.asyncio
    async def test_unhealthy(self) -> None:
        client = MagicMock()
        client.table.return_value.select.return_value.limit.return_value.execute.side_effect = ConnectionError(
            "refused"
        )

        result = await binding.check_database_connection(client)

        assert result["healthy"] is False
        assert "refused" in result["error"]
