"""Minimal dev.to articles API client."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from devto_publisher.core.models import DevtoError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dev.to/api"


class ApiError(DevtoError):
    """A dev.to API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass
class Article:
    """Summary of an article as returned by the list endpoint."""
    id: int
    title: str


class DevtoClient:
    """Thin wrapper around the dev.to REST API.

    Only the calls needed to list, create and update articles are covered.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_published(self, per_page: int = 30) -> List[Article]:
        """List the authenticated user's published articles."""
        data = self._request("GET", "/articles/me/published", params={'per_page': per_page})
        return [
            Article(
                id=item['id'],
                title=item.get('title', ""),
            )
            for item in data
        ]

    def create_article(self, body_markdown: str, published: bool) -> int:
        """Create a new article.

        Returns:
            The id dev.to assigned to the article
        """
        data = self._request("POST", "/articles", json=self._payload(body_markdown, published))
        log.debug("Created article %s", data.get('id'))
        return data['id']

    def update_article(self, article_id: int, body_markdown: str, published: bool) -> int:
        """Replace an existing article's content.

        Returns:
            The article id
        """
        data = self._request(
            "PUT", f"/articles/{article_id}", json=self._payload(body_markdown, published)
        )
        log.debug("Updated article %s", article_id)
        return data.get('id', article_id)

    @staticmethod
    def _payload(body_markdown: str, published: bool) -> Dict[str, Any]:
        return {'article': {'body_markdown': body_markdown, 'published': published}}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        if not self.api_key:
            raise ApiError("No API key configured (use --api-key or DEVTO_API_KEY)")

        url = f"{self.base_url}{path}"
        log.debug("%s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                headers={'api-key': self.api_key, 'Accept': 'application/json'},
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} failed: {e}") from e

        if not resp.ok:
            raise ApiError(
                f"{method} {url} returned {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        return resp.json()
