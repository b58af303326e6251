"""Image link discovery and rewriting for Markdown articles."""

import re
from pathlib import Path
from typing import Union

from devto_publisher.core.models import LinkMap
from devto_publisher.core.parser import parse, parse_document

# Pattern for inline images: ![alt](target), target on a single line
IMAGE_LINK_PATTERN = re.compile(r'!\[(?P<alt>[^\]]*)\]\((?P<target>[^)\n]*)\)')


def find_image_links(markdown: str) -> LinkMap:
    """Collect image targets from Markdown text.

    Args:
        markdown: Article body

    Returns:
        Each distinct target mapped to "" in order of first appearance
    """
    links: LinkMap = {}
    for match in IMAGE_LINK_PATTERN.finditer(markdown):
        target = match.group('target')
        if target and target not in links:
            links[target] = ""
    return links


def replace_image_links(markdown: str, links: LinkMap) -> str:
    """Rewrite image targets that have a non-empty replacement.

    Only the target inside ``![alt](target)`` changes; alt text and all other
    text stay as they are. Targets missing from links or mapped to "" are
    left alone.

    Args:
        markdown: Article body
        links: Target -> replacement mapping

    Returns:
        Rewritten Markdown
    """
    def replace_link(match: re.Match) -> str:
        replacement = links.get(match.group('target'))
        if not replacement:
            return match.group(0)
        return f"![{match.group('alt')}]({replacement})"

    return IMAGE_LINK_PATTERN.sub(replace_link, markdown)


def get_image_links(path: Union[str, Path]) -> LinkMap:
    """Scan an article for image links.

    Returns:
        Target -> "" mapping; empty when the article has no images

    Raises:
        OSError: If the file cannot be read
        ParseError: If the front matter is malformed
    """
    return find_image_links(parse_document(path).markdown)


def set_image_links(path: Union[str, Path], links: LinkMap) -> str:
    """Rewrite an article's image links.

    The header block is copied exactly as found in the file; only the body
    is rewritten.

    Args:
        path: Path to the Markdown file
        links: Target -> replacement mapping

    Returns:
        Full document text with rewritten image links

    Raises:
        OSError: If the file cannot be read
        ParseError: If the front matter is malformed
    """
    path = Path(path)
    source = path.read_bytes()
    document = parse(source, name=str(path))

    header = source[:len(source) - len(document.markdown_source)]
    return header.decode('utf-8') + replace_image_links(document.markdown, links)


def prefix_links(links: LinkMap, prefix: str, force: bool = False) -> LinkMap:
    """Fill replacements with prefix + target.

    Args:
        links: Target -> replacement mapping, not modified
        prefix: Base URL put in front of each target
        force: Overwrite existing replacements too, not only empty ones

    Returns:
        New mapping with the same keys
    """
    return {
        target: prefix + target if force or not replacement else replacement
        for target, replacement in links.items()
    }
