"""Configuration for devto publisher.

Two kinds of configuration live here:

- Settings: process-wide options (API key, debug) resolved once at startup
  from config.yml, the environment and command-line values, then passed
  explicitly to whatever needs them.
- ArticleConfig: per-article state kept in a devto.yml file next to the
  Markdown file (the dev.to article id and the image link mapping).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from devto_publisher.core.models import DevtoError, LinkMap

ARTICLE_CONFIG_NAME = "devto.yml"
SETTINGS_FILE_NAMES = ("config.yml", "config.yaml")
ENV_PREFIX = "DEVTO_"


class ConfigError(DevtoError):
    """Raised when a configuration file cannot be used."""


@dataclass
class Settings:
    """Options shared by every command."""
    api_key: str = ""
    debug: bool = False


def load_settings(
    search_dir: Union[str, Path] = ".",
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """Resolve Settings from all sources.

    Later sources win: defaults, config.yml in search_dir, DEVTO_* environment
    variables, then overrides that are not None.

    Args:
        search_dir: Directory holding config.yml / config.yaml
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values, typically from command-line flags

    Returns:
        Settings instance
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for file_name in SETTINGS_FILE_NAMES:
        settings_path = Path(search_dir) / file_name
        if settings_path.exists():
            data = _load_yaml_mapping(settings_path)
            if 'api-key' in data:
                values['api_key'] = str(data['api-key'])
            break

    api_key = environ.get(f"{ENV_PREFIX}API_KEY")
    if api_key:
        values['api_key'] = api_key

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)


def config_path_for(markdown_path: Union[str, Path]) -> Path:
    """Location of the devto.yml belonging to a Markdown file."""
    return Path(markdown_path).parent / ARTICLE_CONFIG_NAME


@dataclass
class ArticleConfig:
    """Per-article state stored in devto.yml.

    Example file:

        article_id: 1234
        images:
          "./image-1.png": "./new-image-1.png"
          "./image-2.png": ""

    An article_id of 0 means the article has not been created on dev.to yet.
    See LinkMap for the meaning of empty image values.
    """
    article_id: int = 0
    images: LinkMap = field(default_factory=dict)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ArticleConfig":
        """Load devto.yml, or return an empty config if it does not exist.

        Raises:
            ConfigError: If the file is not a valid devto.yml
        """
        path = Path(path)
        if not path.exists():
            return cls()

        data = _load_yaml_mapping(path)

        article_id = data.get('article_id') or 0
        if isinstance(article_id, bool) or not isinstance(article_id, int):
            raise ConfigError(f"{path}: article_id must be an integer, got {article_id!r}")

        images = data.get('images') or {}
        if not isinstance(images, dict):
            raise ConfigError(f"{path}: images must be a mapping")

        return cls(
            article_id=article_id,
            images={str(k): "" if v is None else str(v) for k, v in images.items()},
        )

    def save(self, path: Union[str, Path]) -> None:
        """Write devto.yml, keeping image order."""
        data = {'article_id': self.article_id, 'images': dict(self.images)}
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                data,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )

    def merge_images(self, discovered: LinkMap) -> None:
        """Add newly discovered targets without touching existing values."""
        for target, replacement in discovered.items():
            self.images.setdefault(target, replacement)


def _load_yaml_mapping(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return data
