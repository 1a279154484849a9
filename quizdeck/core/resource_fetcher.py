"""Retrieval of catalog and quiz documents from a content root.

The content root is either a local directory or an ``http(s)://`` base URL.
Relative resource paths such as ``data/quizzes.json`` are resolved against it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from quizdeck.constants.network_constants import FETCH_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class ResourceFetchError(Exception):
    """Raised when a resource cannot be retrieved or decoded."""


class ResourceFetcher:
    """Reads JSON documents relative to a directory or URL."""

    def __init__(
        self,
        content_root: str | Path,
        *,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        root = str(content_root)
        self._is_remote = root.startswith(("http://", "https://"))
        self._root = root.rstrip("/") + "/" if self._is_remote else Path(root)
        self._timeout = timeout
        self._client = client

    @property
    def content_root(self) -> str:
        return str(self._root)

    def resolve(self, relative_path: str) -> str:
        if self._is_remote:
            return str(httpx.URL(self._root).join(relative_path))
        return str(self._root / relative_path)

    def fetch_text(self, relative_path: str) -> str:
        location = self.resolve(relative_path)
        logger.debug("Fetching %s", location)
        if self._is_remote:
            return self._fetch_remote(location)
        try:
            return Path(location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceFetchError(f"Could not read {location}: {exc}") from exc

    def fetch_json(self, relative_path: str) -> Any:
        text = self.fetch_text(relative_path)
        if not text.strip():
            raise ResourceFetchError(f"{relative_path} is empty.")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ResourceFetchError(f"{relative_path} is not valid JSON: {exc}") from exc

    def _fetch_remote(self, url: str) -> str:
        headers = {"Cache-Control": "no-store"}
        try:
            if self._client is not None:
                response = self._client.get(url, headers=headers, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ResourceFetchError(f"Could not fetch {url}: {exc}") from exc
        try:
            return response.content.decode(response.encoding or "utf-8")
        except (LookupError, UnicodeDecodeError) as exc:
            raise ResourceFetchError(f"{url} is not valid text: {exc}") from exc
