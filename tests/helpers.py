"""Shared test doubles for rows and sessions."""

from unittest.mock import AsyncMock, MagicMock


def make_mock_row(**kwargs) -> MagicMock:
    """Create a mock row exposing ``_mapping`` as a real dict, like a SQLAlchemy Row."""
    row = MagicMock()
    row._mapping = kwargs
    return row


def make_mock_session(fetchone_row=None, fetchall_rows=None, scalar=None) -> AsyncMock:
    """Build an AsyncMock session whose execute returns a mock result."""
    mock_result = MagicMock()
    mock_result.fetchone.return_value = fetchone_row
    mock_result.fetchall.return_value = fetchall_rows or []
    mock_result.scalar_one.return_value = scalar

    mock_session = AsyncMock()
    mock_session.execute = AsyncMock(return_value=mock_result)
    return mock_session
