"""Core document handling for devto publisher."""

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
from devto_publisher.core.parser import decode_front_matter, parse, parse_document, render
from devto_publisher.core.links import (
    find_image_links,
    get_image_links,
    prefix_links,
    replace_image_links,
    set_image_links,
)

__all__ = [
    "DevtoError",
    "DocumentError",
    "EncodeError",
    "FrontMatter",
    "FrontMatterFormat",
    "LinkMap",
    "ParsedDocument",
    "ParseError",
    "decode_front_matter",
    "parse",
    "parse_document",
    "render",
    "find_image_links",
    "get_image_links",
    "prefix_links",
    "replace_image_links",
    "set_image_links",
]
