"""Tests for shared/repository.py."""

import pytest
from unittest.mock import MagicMock

import httpx
from postgrest.exceptions import APIError

from shared.exceptions import ExternalServiceError, ValidationError
from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._execute(self._db.table("test").select("*"))
                return result.data

        repo = TestRepository(mock_db)
        result = repo.get_all()

        assert result == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")


class TestExecute:
    def test_returns_query_result(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.return_value.data = [{"id": "1"}]

        assert repo._execute(query).data == [{"id": "1"}]

    def test_invalid_text_representation_is_validation_error(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.side_effect = APIError({
            "message": 'invalid input syntax for type uuid: "nope"',
            "code": "22P02",
            "hint": None,
            "details": None,
        })

        with pytest.raises(ValidationError) as exc_info:
            repo._execute(query)
        assert "invalid input syntax" in exc_info.value.message

    def test_other_api_errors_are_external_service_errors(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.side_effect = APIError({
            "message": "relation does not exist",
            "code": "42P01",
            "hint": None,
            "details": None,
        })

        with pytest.raises(ExternalServiceError) as exc_info:
            repo._execute(query)
        assert exc_info.value.service == "database"
        assert exc_info.value.details["db_code"] == "42P01"
        assert exc_info.value.status_code == 500

    def test_transport_errors_are_external_service_errors(self):
        repo = BaseRepository(MagicMock())
        query = MagicMock()
        query.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ExternalServiceError) as exc_info:
            repo._execute(query)
        assert exc_info.value.message == "Database unavailable"
