"""Data item service - paged searches over data items."""

import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import QueryConfig, get_settings
from app.core.database import get_read_only_session_factory
from app.core.errors import ValidationError
from app.persistence.access_control import access_control_for
from app.persistence.data_item_query import DataItemQuery
from app.persistence.data_item_repository import DataItemRepository
from app.persistence.program_attribute_query import ProgramAttributeQuery
from app.schemas.v1.data_items import DataItem, DataItemPage, Pager
from app.schemas.v1.query_params import DataItemQueryParams

logger = structlog.get_logger(__name__)


class DataItemService:
    """Service for searching data items."""

    def __init__(
        self,
        session: AsyncSession,
        query: DataItemQuery | None = None,
        config: QueryConfig | None = None,
    ):
        self.config = config or get_settings().query
        self.query = query or ProgramAttributeQuery(access_control_for(self.config.access_control))
        self.repository = DataItemRepository(session, self.query)

    async def find(self, params: DataItemQueryParams) -> list[DataItem]:
        return await self.repository.find(params)

    async def count(self, params: DataItemQueryParams) -> int:
        return await self.repository.count(params)

    async def search(
        self,
        params: DataItemQueryParams,
        page: int = 1,
        page_size: int | None = None,
        paging: bool = True,
    ) -> DataItemPage:
        """Run one page of the search plus the total count.

        With ``paging=False`` the bag's own limit/offset are used as given and
        no pager is returned.
        """
        if not paging:
            items = await self.repository.find(params)
            logger.info(
                "Data item search completed",
                dimension_item_type=self.query.dimension_item_type.value,
                items=len(items),
            )
            return DataItemPage(items=items)

        if page < 1:
            raise ValidationError("page must be >= 1", details={"received": page})
        size = page_size if page_size is not None else self.config.default_page_size
        if size < 1:
            raise ValidationError("page_size must be >= 1", details={"received": size})
        size = min(size, self.config.max_page_size)

        paged = params.model_copy(update={"max_limit": size, "offset": (page - 1) * size})
        items = await self.repository.find(paged)
        total = await self.repository.count(params)

        logger.info(
            "Data item search completed",
            dimension_item_type=self.query.dimension_item_type.value,
            page=page,
            page_size=size,
            items=len(items),
            total=total,
        )
        return DataItemPage(
            items=items,
            pager=Pager(
                page=page,
                page_size=size,
                total=total,
                page_count=math.ceil(total / size) if total else 0,
            ),
        )


@asynccontextmanager
async def open_data_item_service(
    config: QueryConfig | None = None,
) -> AsyncIterator[DataItemService]:
    """Yield a service bound to a fresh session on the read-only engine."""
    async with get_read_only_session_factory()() as session:
        yield DataItemService(session, config=config)
