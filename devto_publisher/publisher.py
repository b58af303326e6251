"""Publishing workflows: generate devto.yml, submit and list articles."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from devto_publisher.api import DevtoClient
from devto_publisher.config import ArticleConfig, Settings, config_path_for
from devto_publisher.core.links import get_image_links, prefix_links, set_image_links
from devto_publisher.core.parser import parse

log = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    """Outcome of a submit call."""
    path: Path
    article_id: int
    published: bool
    prefix: str = ""
    created: bool = False
    dry_run: bool = False


class Publisher:
    """Ties together article parsing, devto.yml and the dev.to API."""

    def __init__(self, settings: Settings, client: Optional[DevtoClient] = None):
        """Initialize Publisher.

        Args:
            settings: Resolved process settings
            client: API client (default: built from settings.api_key)
        """
        self.settings = settings
        self.client = client or DevtoClient(settings.api_key)

    def generate(
        self,
        markdown_path: Union[str, Path],
        prefix: str = "",
        force: bool = False,
    ) -> ArticleConfig:
        """Create or update the devto.yml next to an article.

        New image targets are added with empty replacements, existing entries
        keep their values. With a prefix, empty replacements become
        prefix + target; force applies the prefix to every entry.

        Args:
            markdown_path: Path to the Markdown file
            prefix: Base URL for image links
            force: Overwrite existing replacements when prefixing

        Returns:
            The saved ArticleConfig
        """
        config_path = config_path_for(markdown_path)
        config = ArticleConfig.load(config_path)

        discovered = get_image_links(markdown_path)
        config.merge_images(discovered)
        log.debug("Found %d image link(s) in %s", len(discovered), markdown_path)

        if prefix:
            config.images = prefix_links(config.images, prefix, force)

        config.save(config_path)
        log.info("Wrote %s", config_path)
        return config

    def submit(
        self,
        markdown_path: Union[str, Path],
        published: bool = False,
        prefix: str = "",
        dry_run: bool = False,
    ) -> SubmitResult:
        """Submit an article to dev.to.

        Image links are rewritten with the mapping from devto.yml. An
        article_id of 0 creates a new article and stores the new id in
        devto.yml; otherwise the existing article is updated.

        Args:
            markdown_path: Path to the Markdown file
            published: Publish the article. published: true in the front
                matter wins over this flag.
            prefix: Base URL for image links without a replacement
            dry_run: Do everything except the API call and devto.yml update

        Returns:
            SubmitResult describing what was (or would be) done
        """
        path = Path(markdown_path)
        config_path = config_path_for(path)
        config = ArticleConfig.load(config_path)

        images = prefix_links(config.images, prefix) if prefix else config.images
        content = set_image_links(path, images)
        published = published or parse(content.encode('utf-8'), name=str(path)).front_matter.published

        result = SubmitResult(
            path=path,
            article_id=config.article_id,
            published=published,
            prefix=prefix,
            dry_run=dry_run,
        )
        if dry_run:
            return result

        if config.article_id:
            self.client.update_article(config.article_id, content, published)
            log.info("Updated article %s", config.article_id)
        else:
            result.article_id = self.client.create_article(content, published)
            result.created = True
            config.article_id = result.article_id
            config.save(config_path)
            log.info("Created article %s, id saved to %s", result.article_id, config_path)

        return result

    def list_articles(self, out: TextIO, per_page: int = 30) -> int:
        """Print published articles as "[<id>] <title>" lines.

        Returns:
            Number of articles printed
        """
        articles = self.client.list_published(per_page=per_page)
        for article in articles:
            print(f"[{article.id}] {article.title}", file=out)
        return len(articles)


def format_dry_run(result: SubmitResult) -> str:
    """Human readable summary of a dry run."""
    return "\n".join([
        "This is a dry run. Remove --dry-run to submit to dev.to",
        "---",
        f"Filename: {result.path}",
        f"Published: {str(result.published).lower()}",
        f"Prefixed: {result.prefix}",
    ])
