"""Read notes from a running vault through the Obsidian Local REST API plugin."""
from __future__ import annotations

import warnings
from typing import Dict, List, Optional
from urllib.parse import quote

import requests
from urllib3.exceptions import InsecureRequestWarning

from .base import SourceError, SourceListError, SourceReadError


class LocalRestApiSource:
    """Serve vault notes from the Local REST API plugin.

    The plugin exposes two endpoints used here:

    * ``GET /vault/{folder}/`` lists the entries of a folder as
      ``{"files": [...]}``; sub-folders end with ``/``
    * ``GET /vault/{path}`` returns the raw Markdown of a note.

    Parameters
    ----------
    base_url:
        Root URL of the plugin, ``https://127.0.0.1:27124`` by default. The
        plugin's HTTP port (``27123``) works too.
    api_key:
        Bearer token shown in the plugin's settings.
    verify:
        Passed to ``requests``. The plugin ships a self-signed certificate so
        this defaults to ``False``, and urllib3's ``InsecureRequestWarning``
        is silenced for those requests only.
    session:
        Optional ``requests.Session`` instance. Primarily intended for tests so
        that HTTP requests can be mocked.
    """

    DEFAULT_URL = "https://127.0.0.1:27124"

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_URL,
        api_key: Optional[str] = None,
        verify: bool = False,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.verify = verify
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_documents(self) -> List[str]:
        """Walk the vault breadth-first and return every Markdown note."""

        documents: List[str] = []
        pending = [""]
        while pending:
            folder = pending.pop(0)
            for entry in self._list_folder(folder):
                path = f"{folder}{entry}"
                if entry.endswith("/"):
                    pending.append(path)
                elif entry.lower().endswith(".md"):
                    documents.append(path)
        return sorted(documents)

    def read_document(self, path: str) -> str:
        response = self._get(self._vault_url(path), accept="text/markdown")
        if response.status_code >= 400:
            raise SourceReadError(path, f"request failed with status code {response.status_code}")
        return response.text

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @property
    def _default_headers(self) -> Dict[str, str]:
        headers = {"User-Agent": "Obsidian-Book-Highlights/1.0"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _vault_url(self, path: str) -> str:
        return f"{self.base_url}/vault/{quote(path)}"

    def _get(self, url: str, *, accept: str) -> requests.Response:
        headers = dict(self._default_headers)
        headers["Accept"] = accept
        try:
            with warnings.catch_warnings():
                if not self.verify:
                    warnings.simplefilter("ignore", InsecureRequestWarning)
                return self._session.get(url, headers=headers, verify=self.verify, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SourceError(f"Local REST API request to {url} failed: {exc}") from exc

    def _list_folder(self, folder: str) -> List[str]:
        response = self._get(self._vault_url(folder), accept="application/json")
        if response.status_code >= 400:
            raise SourceListError(f"Listing {folder or '/'} failed with status code {response.status_code}.")
        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceListError("Received invalid JSON from the Local REST API") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("files"), list):
            raise SourceListError("Unexpected response format from the Local REST API")
        return [str(entry) for entry in payload["files"]]
