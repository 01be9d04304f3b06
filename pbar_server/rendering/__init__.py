"""Template loading and rendering."""

from .store import (
    DEFAULT_FILTERS,
    TEMPLATE_NAME,
    PbarError,
    TemplateLoadError,
    TemplateLookupError,
    TemplateRenderError,
    TemplateStore,
    truncate_int,
)

__all__ = [
    "DEFAULT_FILTERS",
    "TEMPLATE_NAME",
    "PbarError",
    "TemplateLoadError",
    "TemplateLookupError",
    "TemplateRenderError",
    "TemplateStore",
    "truncate_int",
]
