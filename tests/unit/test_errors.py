"""Unit tests for errors module."""

from app.core.errors import (
    ConfigurationError,
    DataItemServiceError,
    NotFoundError,
    RowMappingError,
    ValidationError,
)


def test_data_item_service_error_base():
    error = DataItemServiceError("test message")
    assert error.message == "test message"
    assert error.code == "DATA_ITEM_INTERNAL_ERROR"
    assert error.details is None


def test_validation_error():
    error = ValidationError("invalid request")
    assert error.code == "DATA_ITEM_INVALID_REQUEST"
    assert isinstance(error, DataItemServiceError)


def test_not_found_error():
    error = NotFoundError("not found", details={"id": 3})
    assert error.code == "DATA_ITEM_NOT_FOUND"
    assert error.details == {"id": 3}


def test_configuration_error():
    error = ConfigurationError("missing session", details={"dependency": "session"})
    assert error.code == "DATA_ITEM_CONFIGURATION_ERROR"
    assert error.details == {"dependency": "session"}


def test_row_mapping_error_records_column():
    error = RowMappingError("bad value type", column="valuetype", details={"uid": "A1"})
    assert error.code == "DATA_ITEM_ROW_MAPPING_ERROR"
    assert error.column == "valuetype"
    assert error.details == {"uid": "A1", "column": "valuetype"}
    assert str(error) == "bad value type"
