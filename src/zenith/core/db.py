from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor


class MongoModel(BaseModel):
    """Document stored under a UUID `_id`, exposed as `id`."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(populate_by_name=True, json_schema_serialization_defaults_required=True)

    def to_mongo(self) -> dict[str, Any]:
        """Dump for insertion, with `id` stored as `_id`."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


def upsert_update(fields: dict[str, Any]) -> dict[str, Any]:
    """Update document for an upsert keyed by something other than `_id`.

    Without `$setOnInsert` the server would assign an ObjectId, which
    MongoModel cannot read back.
    """
    return {"$set": fields, "$setOnInsert": {"_id": uuid4()}}
