"""pbar-server - SVG progress bars rendered from query parameters.

A small FastAPI service that turns ``GET /?progress=42&title=Build`` into an
SVG progress badge through a single Jinja2 template.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
