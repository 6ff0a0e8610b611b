from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from app.config.settings import Settings
from app.database import connection
from app.database.connection import close_pool, get_connection, init_pool

CONNECTION_MODULE = "app.database.connection"


@pytest.fixture(autouse=True)
def _reset_pool() -> Generator[None, None, None]:
    yield
    connection._pool = None


class TestInitPool:
    @patch(f"{CONNECTION_MODULE}.ConnectionPool")
    def test_pool_is_sized_from_settings(self, mock_pool_cls: MagicMock) -> None:
        init_pool(Settings(db_pool_min_size=2, db_pool_max_size=24))

        kwargs = mock_pool_cls.call_args.kwargs
        assert kwargs["min_size"] == 2
        assert kwargs["max_size"] == 24

    @patch(f"{CONNECTION_MODULE}.ConnectionPool")
    def test_conninfo_comes_from_settings(self, mock_pool_cls: MagicMock) -> None:
        init_pool(Settings(db_host="db.internal", db_database="deeds"))

        conninfo = mock_pool_cls.call_args.args[0]
        assert "host=db.internal" in conninfo
        assert "dbname=deeds" in conninfo

    @patch(f"{CONNECTION_MODULE}.ConnectionPool")
    def test_second_init_keeps_open_pool(self, mock_pool_cls: MagicMock) -> None:
        init_pool(Settings())
        init_pool(Settings())
        mock_pool_cls.assert_called_once()

    @patch(f"{CONNECTION_MODULE}.ConnectionPool")
    def test_min_above_max_is_rejected(self, mock_pool_cls: MagicMock) -> None:
        with pytest.raises(ValueError, match="db_pool_min_size"):
            init_pool(Settings(db_pool_min_size=5, db_pool_max_size=2))
        mock_pool_cls.assert_not_called()

    @patch(f"{CONNECTION_MODULE}.ConnectionPool")
    def test_close_pool_closes_and_forgets(self, mock_pool_cls: MagicMock) -> None:
        init_pool(Settings())
        close_pool()

        mock_pool_cls.return_value.close.assert_called_once()
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass
