"""Data item repository - READ-ONLY execution of composed data item queries."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConfigurationError
from app.persistence.data_item_query import DataItemQuery
from app.persistence.program_attribute_query import ProgramAttributeQuery
from app.schemas.v1.data_items import DataItem
from app.schemas.v1.query_params import DataItemQueryParams


class DataItemRepository:
    """Runs a DataItemQuery against the read-only session."""

    def __init__(self, session: AsyncSession | None, query: DataItemQuery | None = None):
        if session is None:
            raise ConfigurationError(
                "DataItemRepository requires a database session",
                details={"dependency": "session"},
            )
        self.session = session
        self.query = query or ProgramAttributeQuery()

    async def find(self, params: DataItemQueryParams) -> list[DataItem]:
        """Execute the data query; every row yields a DataItem or the call fails."""
        fragment = self.query.build_query(params)
        result = await self.session.execute(fragment.to_text(), dict(fragment.params))
        return [self.query.map_row(row) for row in result.fetchall()]

    async def count(self, params: DataItemQueryParams) -> int:
        """Execute the count query over the same filters, ignoring pagination."""
        fragment = self.query.build_count(params)
        result = await self.session.execute(fragment.to_text(), dict(fragment.params))
        return int(result.scalar_one())
