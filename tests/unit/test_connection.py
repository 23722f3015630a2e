import psycopg
import pytest
from psycopg_pool import PoolTimeout

from analyzer.analysis.exceptions import PersistenceFailureError
from analyzer.database.connection import get_connection, storage_errors


class TestStorageErrors:
    def test_maps_driver_errors(self) -> None:
        with pytest.raises(PersistenceFailureError, match="Failed to save analysis report") as exc_info:
            with storage_errors("save analysis report"):
                raise psycopg.OperationalError("connection refused")
        assert isinstance(exc_info.value.__cause__, psycopg.OperationalError)
        assert exc_info.value.kind == "PersistenceFailure"

    def test_maps_pool_timeout(self) -> None:
        with pytest.raises(PersistenceFailureError):
            with storage_errors("load user"):
                raise PoolTimeout("couldn't get a connection after 30.00 sec")

    def test_other_errors_pass_through(self) -> None:
        with pytest.raises(KeyError):
            with storage_errors("load user"):
                raise KeyError("id")


class TestGetConnection:
    def test_requires_initialized_pool(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass
