"""GistClient: stores submitted projects as GitHub gists."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import SecretStr

from playground.runtime.errors import GistError
from playground.runtime.workspace import AUX_FILENAME, SOURCE_FILENAME

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GistClient:
    """Minimal create/get client for the GitHub gists API.

    Usage::

        async with GistClient(token) as gists:
            gist_id = await gists.create({"main.nr": "fn main() {}"})
            files = await gists.get(gist_id)
    """

    def __init__(
        self,
        token: SecretStr | str,
        *,
        base_url: str = DEFAULT_API_URL,
        public: bool = False,
    ) -> None:
        self._token = token if isinstance(token, SecretStr) else SecretStr(token)
        self._base_url = base_url.rstrip("/")
        self._public = public
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GistClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._token.get_secret_value()}",
                "User-Agent": "noir-playground",
            },
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "GistClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def create(self, files: dict[str, str]) -> str:
        """Create a gist from *files* (name → text) and return its id."""
        payload = {
            "public": self._public,
            "files": {name: {"content": text} for name, text in files.items()},
        }
        try:
            response = await self._http().post("/gists", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Gist create failed: %s", exc)
            raise GistError("failed to create gist") from exc

        gist_id = response.json().get("id")
        if not gist_id:
            raise GistError("unexpected response from GitHub API")
        return str(gist_id)

    async def get(self, gist_id: str) -> dict[str, str]:
        """Fetch gist *gist_id* and return its files (name → text)."""
        try:
            response = await self._http().get(f"/gists/{gist_id}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Gist fetch %s failed: %s", gist_id, exc)
            raise GistError("failed to fetch gist") from exc

        data: Any = response.json()
        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, dict):
            raise GistError("unexpected response from GitHub API")
        return {
            name: entry.get("content") or ""
            for name, entry in files.items()
            if isinstance(entry, dict)
        }


def project_to_files(code: str, aux: str) -> dict[str, str]:
    """Name the two project files the way the sandbox mounts them."""
    files = {SOURCE_FILENAME: code}
    # GitHub rejects gist files with empty content.
    if aux:
        files[AUX_FILENAME] = aux
    return files


def files_to_project(files: dict[str, str]) -> tuple[str, str]:
    if SOURCE_FILENAME not in files:
        raise GistError(f"gist has no {SOURCE_FILENAME}")
    return files[SOURCE_FILENAME], files.get(AUX_FILENAME, "")
