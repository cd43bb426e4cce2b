"""OAuth2 client schemas."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class OAuth2Client(BaseModel):
    id: int | None = None
    uid: str | None = None
    name: str
    cid: str
    secret: str
    redirect_uris: list[str] = Field(default_factory=list)
    grant_types: list[str] = Field(default_factory=list)
    created: datetime | None = None
    last_updated: datetime | None = None

    @field_validator("redirect_uris", "grant_types", mode="before")
    @classmethod
    def parse_json_list(cls, v: Any) -> Any:
        # jsonb columns arrive as text when no codec is registered on the driver.
        if isinstance(v, str):
            return json.loads(v)
        if v is None:
            return []
        return v
