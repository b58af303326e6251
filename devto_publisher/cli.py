"""Command line interface: ``devto list|submit|generate``."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from devto_publisher import __version__
from devto_publisher.config import load_settings
from devto_publisher.core.models import DevtoError
from devto_publisher.publisher import Publisher, format_dry_run

log = logging.getLogger(__name__)

SUBMIT_HELP = """Submit an article to dev.to.

If it does not exist, devto.yml is created in the same directory as FILE:

\b
  article_id: 1234
  images:
    "./image-1.png": "./new-image-1.png"
    "./image-2.png": ""

If article_id is 0, a new post is created and its id is stored as article_id.
Image links in FILE are replaced according to images. An empty value keeps
the link as is:

\b
  ![](./image-1.png) --> ![](./new-image-1.png)
  ![](./image-2.png) --> ![](./image-2.png)
"""


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run(func, *args, **kwargs):
    """Call func, turning library errors into click errors."""
    try:
        return func(*args, **kwargs)
    except (DevtoError, OSError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="devto")
@click.option("--api-key", default=None, help="API key for authentication")
@click.option("-d", "--debug", is_flag=True, help="Print debug log on stderr")
@click.pass_context
def cli(ctx: click.Context, api_key: Optional[str], debug: bool):
    """A tool to help you publish to dev.to from your terminal."""
    settings = _run(load_settings, Path.cwd(), api_key=api_key, debug=debug or None)
    _setup_logging(settings.debug)
    log.debug("Settings loaded (api key set: %s)", bool(settings.api_key))
    ctx.obj = Publisher(settings)


@cli.command("list")
@click.pass_obj
def list_cmd(publisher: Publisher):
    """List published articles (maximum 30) as "[<article_id>] <title>"."""
    _run(publisher.list_articles, sys.stdout)


@cli.command(help=SUBMIT_HELP)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-p", "--prefix", default="", help="Prefix image links with the given value")
@click.option(
    "--published",
    is_flag=True,
    help="Publish article with this flag. Front matter in markdown takes precedence",
)
@click.option("--dry-run", is_flag=True, help="Print information instead of submitting to dev.to")
@click.pass_obj
def submit(publisher: Publisher, file: Path, prefix: str, published: bool, dry_run: bool):
    result = _run(publisher.submit, file, published=published, prefix=prefix, dry_run=dry_run)
    if result.dry_run:
        click.echo(format_dry_run(result))
    elif result.created:
        click.echo(f"Created article {result.article_id}")
    else:
        click.echo(f"Updated article {result.article_id}")


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-p", "--prefix", default="", help="Prefix image links with the given value")
@click.option(
    "-f", "--force", is_flag=True, help="Use with -p to override existing values in the devto.yml file"
)
@click.pass_obj
def generate(publisher: Publisher, file: Path, prefix: str, force: bool):
    """Generate a devto.yml configuration file for FILE."""
    config = _run(publisher.generate, file, prefix=prefix, force=force)
    click.echo(f"{len(config.images)} image link(s) in devto.yml")


def main():
    cli()


if __name__ == "__main__":
    main()
