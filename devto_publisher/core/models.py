"""Data models for devto publisher."""

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Dict, Optional

# Image link target -> replacement, as persisted in devto.yml.
#
# Three states per target:
#   - key absent:       target not known yet (a scan will add it)
#   - value "":         known target, keep it as written in the article
#   - value non-empty:  rewrite the target to this value
#
# An empty value is NOT a request to drop the mapping.
LinkMap = Dict[str, str]


class DevtoError(Exception):
    """Base class for errors raised by devto publisher."""


class DocumentError(DevtoError):
    """An error tied to a single Markdown document."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        if name:
            message = f"{name}: {message}"
        super().__init__(message)


class ParseError(DocumentError):
    """Front matter block is malformed or has mistyped fields."""


class EncodeError(DocumentError):
    """Front matter could not be serialized back to YAML."""


class FrontMatterFormat(Enum):
    """Serialization dialect of the header block."""
    NONE = "none"
    YAML = "yaml"


@dataclass(frozen=True)
class FrontMatter:
    """Article fields understood by dev.to.

    Empty strings are the unset value for the optional text fields.
    """
    title: str = ""
    published: bool = False
    description: str = ""
    tags: str = ""

    def to_dict(self) -> Dict[str, object]:
        """Fields in the order they are written back to the header."""
        return {
            'title': self.title,
            'published': self.published,
            'description': self.description,
            'tags': self.tags,
        }


@dataclass(frozen=True)
class ParsedDocument:
    """A Markdown article split into its header and body.

    Built fresh on every parse. Use with_front_matter() to get an edited copy.
    """
    front_matter_format: FrontMatterFormat = FrontMatterFormat.NONE
    front_matter_source: bytes = b""
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    markdown_source: bytes = b""
    name: Optional[str] = field(default=None, compare=False)

    @property
    def has_front_matter(self) -> bool:
        return self.front_matter_format is not FrontMatterFormat.NONE

    @cached_property
    def markdown(self) -> str:
        """Body decoded as UTF-8, computed once."""
        return self.markdown_source.decode('utf-8')

    def with_front_matter(self, **changes) -> "ParsedDocument":
        """Return a copy with some front matter fields replaced."""
        return replace(self, front_matter=replace(self.front_matter, **changes))

    def content(self) -> str:
        """Rebuild the full document from front_matter and the body."""
        # Imported here, parser imports this module
        from devto_publisher.core.parser import render
        return render(self)
