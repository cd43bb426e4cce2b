"""Unit tests for OAuth2ClientRepository."""

import json
from datetime import UTC, datetime

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.persistence.oauth2_client_repository import OAuth2ClientRepository
from app.schemas.v1.oauth2_clients import OAuth2Client
from app.utils.uid import is_valid_uid
from tests.helpers import make_mock_row, make_mock_session

CREATED = datetime(2026, 2, 15, 10, 0, tzinfo=UTC)


def _client_row(**overrides):
    values = {
        "id": 1,
        "uid": "aBcDeFgHiJ1",
        "name": "Mobile app",
        "cid": "mobile",
        "secret": "s3cret",
        "redirect_uris": '["https://app.example.org/cb"]',
        "grant_types": ["password", "refresh_token"],
        "created": CREATED,
        "last_updated": CREATED,
    }
    values.update(overrides)
    return make_mock_row(**values)


def _client(**overrides) -> OAuth2Client:
    values = {"name": "Mobile app", "cid": "mobile", "secret": "s3cret"}
    values.update(overrides)
    return OAuth2Client(**values)


@pytest.mark.asyncio
async def test_save_assigns_uid_and_serializes_lists():
    session = make_mock_session(fetchone_row=_client_row())
    repo = OAuth2ClientRepository(session)

    saved = await repo.save(_client(redirect_uris=["https://app.example.org/cb"]))

    _, bound = session.execute.call_args.args
    assert is_valid_uid(bound["uid"])
    assert json.loads(bound["redirect_uris"]) == ["https://app.example.org/cb"]
    assert saved.id == 1
    assert saved.redirect_uris == ["https://app.example.org/cb"]
    assert saved.grant_types == ["password", "refresh_token"]
    assert saved.created == CREATED


@pytest.mark.asyncio
async def test_save_keeps_existing_uid():
    session = make_mock_session(fetchone_row=_client_row())
    repo = OAuth2ClientRepository(session)

    await repo.save(_client(uid="zYxWvUtSrQ9"))

    _, bound = session.execute.call_args.args
    assert bound["uid"] == "zYxWvUtSrQ9"


@pytest.mark.asyncio
async def test_save_rejects_malformed_uid():
    session = make_mock_session(fetchone_row=_client_row())
    repo = OAuth2ClientRepository(session)

    with pytest.raises(ValidationError) as exc_info:
        await repo.save(_client(uid="not-a-uid"))

    assert exc_info.value.details == {"uid": "not-a-uid"}
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_requires_id():
    repo = OAuth2ClientRepository(make_mock_session())

    with pytest.raises(ValidationError):
        await repo.update(_client())


@pytest.mark.asyncio
async def test_update_missing_row_is_not_found():
    repo = OAuth2ClientRepository(make_mock_session(fetchone_row=None))

    with pytest.raises(NotFoundError):
        await repo.update(_client(id=99))


@pytest.mark.asyncio
async def test_delete_by_id_then_uid():
    session = make_mock_session()
    repo = OAuth2ClientRepository(session)

    await repo.delete(_client(id=5))
    assert session.execute.call_args.args[1] == {"id": 5}

    await repo.delete(_client(uid="aBcDeFgHiJ1"))
    assert session.execute.call_args.args[1] == {"uid": "aBcDeFgHiJ1"}


@pytest.mark.asyncio
async def test_delete_without_identity_is_rejected():
    repo = OAuth2ClientRepository(make_mock_session())

    with pytest.raises(ValidationError):
        await repo.delete(_client())


@pytest.mark.asyncio
async def test_get_returns_none_when_missing():
    repo = OAuth2ClientRepository(make_mock_session(fetchone_row=None))

    assert await repo.get(1) is None
    assert await repo.get_by_uid("aBcDeFgHiJ1") is None
    assert await repo.get_by_client_id("mobile") is None


@pytest.mark.asyncio
async def test_get_by_client_id_binds_cid():
    session = make_mock_session(fetchone_row=_client_row())
    repo = OAuth2ClientRepository(session)

    client = await repo.get_by_client_id("mobile")

    assert client.cid == "mobile"
    assert session.execute.call_args.args[1] == {"cid": "mobile"}


@pytest.mark.asyncio
async def test_get_all_maps_every_row():
    session = make_mock_session(fetchall_rows=[_client_row(), _client_row(id=2, cid="web")])
    repo = OAuth2ClientRepository(session)

    clients = await repo.get_all()

    assert [client.cid for client in clients] == ["mobile", "web"]
