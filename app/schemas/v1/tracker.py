"""Tracker import schemas."""

from pydantic import BaseModel


class TrackedEntity(BaseModel):
    tracked_entity: str
    tracked_entity_type: str | None = None
    org_unit: str | None = None

    @property
    def uid(self) -> str:
        return self.tracked_entity
