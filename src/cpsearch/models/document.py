"""Postal-code document model — Records stored in and returned from the index.

Field names follow the stored JSON shape (``ciudad``, ``colonia``, ``cp``,
``delegacion``) so documents round-trip through the backend unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Location(BaseModel):
    """Geographic point, stored as an OpenSearch ``geo_point``."""

    lat: float = Field(default=0.0, description="Latitude")
    lon: float = Field(default=0.0, description="Longitude")


class DocumentCreate(BaseModel):
    """Fields supplied by a caller when creating a document."""

    ciudad: str = Field(default="", description="City")
    colonia: str = Field(default="", description="Neighborhood")
    cp: str = Field(default="", description="Postal code")
    delegacion: str = Field(default="", description="Borough")
    location: Location = Field(default_factory=Location, description="Coordinates")


class Document(DocumentCreate):
    """A stored postal-code record.

    The ``id`` is a server-generated UUID assigned on creation and never
    changed afterwards.
    """

    id: str = Field(default="", description="Document identifier (UUID4)")


class DocumentUpdate(BaseModel):
    """Partial update. Only fields explicitly present in the request are written."""

    ciudad: str | None = None
    colonia: str | None = None
    cp: str | None = None
    delegacion: str | None = None
    location: Location | None = None


class DocumentRef(BaseModel):
    id: str


class DeleteResult(BaseModel):
    id: str
    found: bool = Field(description="Whether a document existed and was removed")
