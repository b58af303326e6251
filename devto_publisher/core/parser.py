"""Front matter parsing for Markdown articles.

A header block opens with a line holding exactly ``---`` at the very start of
the file and closes at the next such line. The block is YAML; everything after
the closing line is the article body and is kept byte for byte.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from devto_publisher.core.models import (
    EncodeError,
    FrontMatter,
    FrontMatterFormat,
    ParsedDocument,
    ParseError,
)

DELIMITER = b'---'

_STRING_FIELDS = ('title', 'description', 'tags')
_NULL_TAG = 'tag:yaml.org,2002:null'
_BOOL_TAG = 'tag:yaml.org,2002:bool'


def parse_document(path: Union[str, Path]) -> ParsedDocument:
    """Read a Markdown file and parse it.

    Args:
        path: Path to the Markdown file

    Returns:
        ParsedDocument for the file's current contents

    Raises:
        OSError: If the file cannot be read
        ParseError: If the front matter is malformed
    """
    path = Path(path)
    source = path.read_bytes()
    return parse(source, name=str(path))


def parse(source: bytes, name: Optional[str] = None) -> ParsedDocument:
    """Split raw bytes into front matter and body, and decode the front matter.

    Args:
        source: Raw document bytes
        name: Label used in error messages (usually the file path)

    Returns:
        ParsedDocument. Without a header block the whole input is the body.

    Raises:
        ParseError: If the document is not UTF-8 or the front matter is malformed
    """
    split = split_front_matter(source)
    if split is None:
        _decode_utf8(source, "document", name)
        return ParsedDocument(markdown_source=source, name=name)

    front_matter_source, markdown_source = split
    _decode_utf8(markdown_source, "body", name)
    return ParsedDocument(
        front_matter_format=FrontMatterFormat.YAML,
        front_matter_source=front_matter_source,
        front_matter=decode_front_matter(front_matter_source, name),
        markdown_source=markdown_source,
        name=name,
    )


def split_front_matter(source: bytes) -> Optional[Tuple[bytes, bytes]]:
    """Locate the header block.

    Returns:
        (front matter bytes, body bytes), or None when the document has no
        complete header block
    """
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].rstrip(b'\r\n') != DELIMITER:
        return None

    start = offset = len(lines[0])
    for line in lines[1:]:
        if line.rstrip(b'\r\n') == DELIMITER:
            return source[start:offset], source[offset + len(line):]
        offset += len(line)

    return None


def decode_front_matter(source: bytes, name: Optional[str] = None) -> FrontMatter:
    """Decode a YAML header block into FrontMatter.

    Text fields keep the scalar exactly as written (``title: 3.10`` stays
    "3.10"), so the block is composed into nodes rather than loaded.
    Missing keys and null values fall back to defaults, unknown keys are
    ignored.

    Raises:
        ParseError: On invalid YAML or mistyped fields
    """
    text = _decode_utf8(source, "front matter", name)
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML in front matter: {e}", name) from e

    if root is None:
        return FrontMatter()
    if not isinstance(root, yaml.MappingNode):
        raise ParseError(
            f"front matter must be a mapping, got {_kind(root)}", name
        )

    nodes: Dict[str, yaml.Node] = {
        key.value: value
        for key, value in root.value
        if isinstance(key, yaml.ScalarNode)
    }
    fields: Dict[str, Any] = {
        key: _string_field(nodes.get(key), key, name) for key in _STRING_FIELDS
    }
    fields['published'] = _bool_field(nodes.get('published'), 'published', name)
    return FrontMatter(**fields)


def render(document: ParsedDocument) -> str:
    """Serialize document.front_matter and append the untouched body.

    Key order and quoting of the original header are not preserved, only
    the field values.

    Raises:
        EncodeError: If the front matter cannot be dumped
    """
    if not document.has_front_matter and document.front_matter == FrontMatter():
        return document.markdown

    try:
        header = yaml.safe_dump(
            document.front_matter.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=float('inf'),
        )
    except yaml.YAMLError as e:
        raise EncodeError(f"cannot serialize front matter: {e}", document.name) from e

    return f"---\n{header}---\n{document.markdown}"


def _decode_utf8(data: bytes, part: str, name: Optional[str]) -> str:
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ParseError(f"{part} is not valid UTF-8: {e}", name) from e


def _kind(node: yaml.Node) -> str:
    if isinstance(node, yaml.SequenceNode):
        return "list"
    if isinstance(node, yaml.MappingNode):
        return "mapping"
    return "scalar"


def _string_field(node: Optional[yaml.Node], key: str, name: Optional[str]) -> str:
    if node is None or node.tag == _NULL_TAG:
        return ""
    if not isinstance(node, yaml.ScalarNode):
        raise ParseError(f"'{key}' must be a string, got {_kind(node)}", name)
    return node.value


def _bool_field(node: Optional[yaml.Node], key: str, name: Optional[str]) -> bool:
    if node is None or node.tag == _NULL_TAG:
        return False
    if not isinstance(node, yaml.ScalarNode) or node.tag != _BOOL_TAG:
        got = repr(node.value) if isinstance(node, yaml.ScalarNode) else _kind(node)
        raise ParseError(f"'{key}' must be a boolean, got {got}", name)
    return yaml.constructor.SafeConstructor.bool_values[node.value.lower()]
