"""
devto publisher - Publish Markdown articles to dev.to

Reads an article's front matter, rewrites its image links according to a
per-article devto.yml mapping and submits it through the dev.to API:
- Front matter parsing and re-serialization
- Image link discovery and rewriting
- Base URL prefixing for image links
"""

__version__ = "0.1.0"

from devto_publisher.core.models import (
    DevtoError,
    DocumentError,
    EncodeError,
    FrontMatter,
    FrontMatterFormat,
    LinkMap,
    ParsedDocument,
    ParseError,
)
from devto_publisher.core.parser import parse, parse_document
from devto_publisher.core.links import get_image_links, prefix_links, set_image_links
from devto_publisher.config import ArticleConfig, ConfigError, Settings, load_settings
from devto_publisher.api import ApiError, DevtoClient
from devto_publisher.publisher import Publisher, SubmitResult

__all__ = [
    "DevtoError",
    "DocumentError",
    "EncodeError",
    "FrontMatter",
    "FrontMatterFormat",
    "LinkMap",
    "ParsedDocument",
    "ParseError",
    "parse",
    "parse_document",
    "get_image_links",
    "prefix_links",
    "set_image_links",
    "ArticleConfig",
    "ConfigError",
    "Settings",
    "load_settings",
    "ApiError",
    "DevtoClient",
    "Publisher",
    "SubmitResult",
]
