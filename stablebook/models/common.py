"""
Common request/response models.

Base model with camelCase wire aliases, plus the small payloads shared by
every record router.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing snake_case fields as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RelatedRemoteIds(CamelModel):
    """Remote ids of the records removed with a horse, by collection."""

    visits: list[str] = Field(default_factory=list)
    vaccines: list[str] = Field(default_factory=list)
    pregnancies: list[str] = Field(default_factory=list)


class DeleteResponse(CamelModel):
    """Response schema for deletions; carries the remote id for mirroring."""

    success: bool = True
    firebase_id: str | None = None
    related_firebase_ids: RelatedRemoteIds | None = None


class RemoteIdRequest(CamelModel):
    """Request schema for recording a remote document id."""

    firebase_id: str = Field(..., min_length=1, max_length=128, description="Remote document id")


class SuccessResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
