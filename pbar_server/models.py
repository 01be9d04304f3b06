"""Query parameter models for the progress bar endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QueryArgs(BaseModel):
    """Query parameters accepted by ``GET /``.

    Everything except ``progress`` is optional; missing values are filled in
    by :func:`pbar_server.fields.derive_context`.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, frozen=True)

    title: str | None = Field(default=None, description="Text shown left of the bar")
    title_width: int | None = Field(default=None, description="Title box width in pixels")
    title_color: str | None = Field(default=None, description="Title box fill color")
    scale: float | None = Field(default=None, description="Value representing 100%")
    progress: float = Field(..., description="Current progress, measured against scale")
    progress_width: int | None = Field(default=None, description="Bar width in pixels")
    progress_color: str | None = Field(default=None, description="Bar fill color")
    suffix: str | None = Field(default=None, description="Appended to the progress label")
