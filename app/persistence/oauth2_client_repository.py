"""OAuth2 client repository - CRUD for oauth2client."""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.schemas.v1.oauth2_clients import OAuth2Client
from app.utils.clock import db_timestamp
from app.utils.uid import generate_uid, is_valid_uid

SELECT_COLUMNS = """
    oauth2clientid AS id, uid, name, cid, secret,
    redirecturis AS redirect_uris, granttypes AS grant_types,
    created, lastupdated AS last_updated
"""


def _to_client(row: Any) -> OAuth2Client | None:
    if row is None:
        return None
    return OAuth2Client.model_validate(dict(row._mapping))


class OAuth2ClientRepository:
    """CRUD operations for oauth2client."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, client: OAuth2Client) -> OAuth2Client:
        """Insert a new client, assigning a uid when it has none."""
        if client.uid is not None and not is_valid_uid(client.uid):
            raise ValidationError("Invalid OAuth2 client uid", details={"uid": client.uid})
        now = db_timestamp()
        query = text(f"""
            INSERT INTO oauth2client
                (uid, name, cid, secret, redirecturis, granttypes, created, lastupdated)
            VALUES
                (:uid, :name, :cid, :secret, :redirect_uris, :grant_types, :created, :last_updated)
            RETURNING {SELECT_COLUMNS}
        """)
        result = await self.session.execute(
            query,
            {
                "uid": client.uid or generate_uid(),
                "name": client.name,
                "cid": client.cid,
                "secret": client.secret,
                "redirect_uris": json.dumps(client.redirect_uris),
                "grant_types": json.dumps(client.grant_types),
                "created": now,
                "last_updated": now,
            },
        )
        return _to_client(result.fetchone())

    async def update(self, client: OAuth2Client) -> OAuth2Client:
        """Update an existing client identified by its id."""
        if client.id is None:
            raise ValidationError("Cannot update an OAuth2 client without id")

        query = text(f"""
            UPDATE oauth2client
            SET name = :name,
                cid = :cid,
                secret = :secret,
                redirecturis = :redirect_uris,
                granttypes = :grant_types,
                lastupdated = :last_updated
            WHERE oauth2clientid = :id
            RETURNING {SELECT_COLUMNS}
        """)
        result = await self.session.execute(
            query,
            {
                "id": client.id,
                "name": client.name,
                "cid": client.cid,
                "secret": client.secret,
                "redirect_uris": json.dumps(client.redirect_uris),
                "grant_types": json.dumps(client.grant_types),
                "last_updated": db_timestamp(),
            },
        )
        updated = _to_client(result.fetchone())
        if updated is None:
            raise NotFoundError("OAuth2 client not found", details={"id": client.id})
        return updated

    async def delete(self, client: OAuth2Client) -> None:
        """Delete a client by id, or by uid when the id is unknown."""
        if client.id is not None:
            query = text("DELETE FROM oauth2client WHERE oauth2clientid = :id")
            await self.session.execute(query, {"id": client.id})
        elif client.uid:
            query = text("DELETE FROM oauth2client WHERE uid = :uid")
            await self.session.execute(query, {"uid": client.uid})
        else:
            raise ValidationError("Cannot delete an OAuth2 client without id or uid")

    async def get(self, client_id: int) -> OAuth2Client | None:
        """Get client by numeric id."""
        query = text(f"SELECT {SELECT_COLUMNS} FROM oauth2client WHERE oauth2clientid = :id")
        result = await self.session.execute(query, {"id": client_id})
        return _to_client(result.fetchone())

    async def get_by_uid(self, uid: str) -> OAuth2Client | None:
        query = text(f"SELECT {SELECT_COLUMNS} FROM oauth2client WHERE uid = :uid")
        result = await self.session.execute(query, {"uid": uid})
        return _to_client(result.fetchone())

    async def get_by_client_id(self, cid: str) -> OAuth2Client | None:
        """Get client by its OAuth2 client id (cid)."""
        query = text(f"SELECT {SELECT_COLUMNS} FROM oauth2client WHERE cid = :cid")
        result = await self.session.execute(query, {"cid": cid})
        return _to_client(result.fetchone())

    async def get_all(self) -> list[OAuth2Client]:
        query = text(f"SELECT {SELECT_COLUMNS} FROM oauth2client ORDER BY name, uid")
        result = await self.session.execute(query)
        return [_to_client(row) for row in result.fetchall()]
