"""Client for the public pages API."""

from __future__ import annotations

import logging
from typing import List

import requests

from .errors import UploadFailure
from .models import SeoMetadata

logger = logging.getLogger("page_parser")


class PagesApiClient:
    """Persists SEO metadata and text snippets for a page."""

    def __init__(self, base_url: str, session: requests.Session, timeout: float = 15.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout

    def _send(self, method: str, url: str, payload: object) -> None:
        try:
            resp = self.session.request(method, url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise UploadFailure(url, exc) from exc

    def update_seo(self, page_id: str, seo: SeoMetadata) -> None:
        url = f"{self.base_url}/v1/public/pages"
        logger.debug("Updating page %s at %s", page_id, url)
        self._send("PUT", url, seo.to_payload(page_id))

    def create_snippets(self, page_id: str, snippets: List[str]) -> None:
        """Post the full ordered snippet list as a JSON array."""
        url = f"{self.base_url}/v1/public/pages/{page_id}/snippets"
        logger.debug("Posting %d snippets to %s", len(snippets), url)
        self._send("POST", url, list(snippets))
