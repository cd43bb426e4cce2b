"""Root conftest for tests."""

import os

import pytest

from tests.helpers import make_mock_row

if os.getenv("APP_ENV", "").strip().lower() == "prod":
    raise RuntimeError("Refusing to run tests with APP_ENV=prod")

os.environ["APP_ENV"] = "local"
os.environ.setdefault("QUERY_ACCESS_CONTROL", "public_read")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    dir_marker_map = {
        "unit": pytest.mark.unit,
        "integration": pytest.mark.integration,
    }
    for item in items:
        test_path = str(item.fspath)
        for dir_name, marker in dir_marker_map.items():
            if f"/{dir_name}/" in test_path or f"\\{dir_name}\\" in test_path:
                item.add_marker(marker)
                break


@pytest.fixture
def program_attribute_row():
    """Factory for program attribute result rows with sensible defaults."""

    def _create(**overrides):
        values = {
            "program_uid": "P1",
            "program_name": "Child Programme",
            "program_shortname": "Child",
            "uid": "A1",
            "name": "Weight",
            "shortname": "Wgt",
            "code": "WEIGHT",
            "valuetype": "NUMBER",
            "p_i18n_name": "Child Programme",
            "i18n_name": "Weight",
            "p_i18n_shortname": "Child",
            "i18n_shortname": "Wgt",
            "id": 42,
            "programid": 7,
            "program_publicaccess": "rw------",
            "trackedentityattribute_publicaccess": "rw------",
        }
        values.update(overrides)
        return make_mock_row(**values)

    return _create
