"""OAuth2 client service - transactional pass-through to the client store."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session_factory
from app.persistence.oauth2_client_repository import OAuth2ClientRepository
from app.schemas.v1.oauth2_clients import OAuth2Client

logger = structlog.get_logger(__name__)


class OAuth2ClientService:
    """Each operation runs in its own transaction; reads are read-only."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.store = OAuth2ClientRepository(session)

    @asynccontextmanager
    async def _transaction(self, read_only: bool = False) -> AsyncIterator[None]:
        try:
            if read_only:
                await self.session.execute(text("SET TRANSACTION READ ONLY"))
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def save_oauth2_client(self, client: OAuth2Client) -> OAuth2Client:
        async with self._transaction():
            saved = await self.store.save(client)
        logger.info("OAuth2 client saved", uid=saved.uid, cid=saved.cid)
        return saved

    async def update_oauth2_client(self, client: OAuth2Client) -> OAuth2Client:
        async with self._transaction():
            updated = await self.store.update(client)
        logger.info("OAuth2 client updated", uid=updated.uid, cid=updated.cid)
        return updated

    async def delete_oauth2_client(self, client: OAuth2Client) -> None:
        async with self._transaction():
            await self.store.delete(client)
        logger.info("OAuth2 client deleted", id=client.id, uid=client.uid)

    async def get_oauth2_client(self, client_id: int) -> OAuth2Client | None:
        async with self._transaction(read_only=True):
            return await self.store.get(client_id)

    async def get_oauth2_client_by_uid(self, uid: str) -> OAuth2Client | None:
        async with self._transaction(read_only=True):
            return await self.store.get_by_uid(uid)

    async def get_oauth2_client_by_client_id(self, cid: str) -> OAuth2Client | None:
        async with self._transaction(read_only=True):
            return await self.store.get_by_client_id(cid)

    async def get_oauth2_clients(self) -> list[OAuth2Client]:
        async with self._transaction(read_only=True):
            return await self.store.get_all()


@asynccontextmanager
async def open_oauth2_client_service() -> AsyncIterator[OAuth2ClientService]:
    """Yield a service bound to a fresh session on the primary engine."""
    async with get_session_factory()() as session:
        yield OAuth2ClientService(session)
