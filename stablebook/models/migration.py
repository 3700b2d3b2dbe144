"""
Migration schemas.

Snapshot documents are kept as loose dicts: legacy documents carry
inconsistent fields and Hebrew enum labels, which the migration service
normalizes itself.

Dependencies: pydantic
System role: Migration API contracts
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from stablebook.models.common import CamelModel


class MigrationRequest(BaseModel):
    """Snapshot of remote documents; each item carries its remote id in ``id``."""

    horses: list[dict[str, Any]] = Field(default_factory=list)
    visits: list[dict[str, Any]] = Field(default_factory=list)
    vaccines: list[dict[str, Any]] = Field(default_factory=list)
    pregnancies: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("horses", "visits", "vaccines", "pregnancies", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ImportCounts(CamelModel):
    """Records inserted per entity type."""

    horses: int = 0
    visits: int = 0
    vaccines: int = 0
    pregnancies: int = 0

    def add(self, other: "ImportCounts") -> "ImportCounts":
        return ImportCounts(
            horses=self.horses + other.horses,
            visits=self.visits + other.visits,
            vaccines=self.vaccines + other.vaccines,
            pregnancies=self.pregnancies + other.pregnancies,
        )


class MigrationResponse(CamelModel):
    """Response schema for a supplied-snapshot migration."""

    success: bool = True
    imported: ImportCounts


class MigrationReport(CamelModel):
    """Outcome of an automatic migration from the remote store."""

    success: bool = True
    imported: ImportCounts = Field(default_factory=ImportCounts)
    tenants: dict[str, ImportCounts] = Field(default_factory=dict)
    failed_tenants: list[str] = Field(default_factory=list)
    skipped: bool = Field(default=False, description="True when the guard prevented a run")
