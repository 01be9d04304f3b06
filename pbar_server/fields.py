"""Derivation of the template context from query parameters."""

from __future__ import annotations

from .colors import DEFAULT_TITLE_COLOR, color_for
from .models import QueryArgs

ContextValue = str | int | float

DEFAULT_SCALE = 100.0
DEFAULT_SUFFIX = "%"

PROGRESS_WIDTH = 90
TITLED_PROGRESS_WIDTH = 60
TITLE_PADDING = 10
TITLE_CHAR_WIDTH = 6


def title_width_for(title: str) -> int:
    """Approximate pixel width reserved for ``title``."""
    return TITLE_PADDING + TITLE_CHAR_WIDTH * len(title)


def derive_context(query: QueryArgs) -> dict[str, ContextValue]:
    """Build the full render context for a request.

    Explicit query values always win. Otherwise widths depend on whether a
    title is present, ``scale`` falls back to 100, ``suffix`` to ``%`` and the
    bar color is chosen from the final progress ratio.

    Args:
        query: Parsed query parameters

    Returns:
        Mapping of every field the template reads
    """
    context: dict[str, ContextValue] = {}
    progress_width = PROGRESS_WIDTH
    title_width = 0

    if query.title is not None:
        progress_width = TITLED_PROGRESS_WIDTH
        title_width = title_width_for(query.title)
        context["title"] = query.title

    scale = query.scale if query.scale is not None else DEFAULT_SCALE

    context["title_color"] = (
        query.title_color if query.title_color is not None else DEFAULT_TITLE_COLOR
    )
    context["title_width"] = (
        query.title_width if query.title_width is not None else title_width
    )
    context["scale"] = scale
    context["progress"] = query.progress
    context["progress_width"] = (
        query.progress_width if query.progress_width is not None else progress_width
    )
    context["progress_color"] = (
        query.progress_color
        if query.progress_color is not None
        else color_for(query.progress, scale)
    )
    context["suffix"] = query.suffix if query.suffix is not None else DEFAULT_SUFFIX

    return context
