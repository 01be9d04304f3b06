"""Template store holding the single progress bar template."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from importlib import resources
from pathlib import Path
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
)

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "pbar_template"
DEFAULT_TEMPLATE_RESOURCE = "default.svg"


class PbarError(Exception):
    """Base class for template store errors."""


class TemplateLoadError(PbarError):
    """Raised at startup when the template source cannot be read or compiled."""


class TemplateLookupError(PbarError):
    """Raised when the store has no template under the requested name."""


class TemplateRenderError(PbarError):
    """Raised when rendering fails for a given context."""


def truncate_int(value: Any) -> int:
    """Truncate a number toward zero.

    Unlike Jinja2's builtin ``int`` filter this never falls back to ``0``:
    strings, booleans, NaN and infinities raise.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"int filter expects a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"int filter cannot truncate {value!r}")
    return math.trunc(value)


DEFAULT_FILTERS: Mapping[str, Callable[..., Any]] = {"int": truncate_int}


def default_template_source() -> str:
    """Return the SVG template shipped with the package."""
    return (
        resources.files(__package__)
        .joinpath(DEFAULT_TEMPLATE_RESOURCE)
        .read_text(encoding="utf-8")
    )


class TemplateStore:
    """Read-only registry for the one template used to draw progress bars.

    Build it once per process with :meth:`load` before serving requests and
    share it; nothing mutates it afterwards.
    """

    def __init__(
        self,
        source: str,
        filters: Mapping[str, Callable[..., Any]] = DEFAULT_FILTERS,
        name: str = TEMPLATE_NAME,
    ) -> None:
        self._env = Environment(
            loader=DictLoader({name: source}),
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            auto_reload=False,
        )
        self._env.filters.update(filters)
        try:
            # Compile eagerly so syntax errors surface at startup
            self._env.get_template(name)
        except TemplateError as exc:
            raise TemplateLoadError(f"Invalid template {name!r}: {exc}") from exc

    @classmethod
    def load(
        cls,
        template_file: Path | None = None,
        filters: Mapping[str, Callable[..., Any]] = DEFAULT_FILTERS,
    ) -> TemplateStore:
        """Load the template from ``template_file`` or the packaged default.

        Args:
            template_file: Custom template path, or None for the default

        Returns:
            Store with the template registered under ``TEMPLATE_NAME``
        """
        if template_file is None:
            logger.debug("Using built-in template")
            return cls(default_template_source(), filters)

        try:
            source = template_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateLoadError(
                f"Cannot read template file {template_file}: {exc}"
            ) from exc

        logger.debug(f"Using template file {template_file}")
        return cls(source, filters)

    def lookup(self, name: str = TEMPLATE_NAME) -> Template:
        try:
            return self._env.get_template(name)
        except TemplateNotFound as exc:
            raise TemplateLookupError(f"Template not found: {name}") from exc

    def render(self, template: Template, context: Mapping[str, Any]) -> str:
        try:
            return template.render(**context)
        except (TemplateError, ArithmeticError, TypeError, ValueError) as exc:
            raise TemplateRenderError(str(exc)) from exc
