"""Tests for GistClient with mocked httpx."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from playground.gist import GistClient, files_to_project, project_to_files
from playground.runtime.errors import GistError


def _response(payload: dict) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    return resp


def _mock_httpx_client(get_json: dict | None = None, post_json: dict | None = None) -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(return_value=_response(get_json or {}))
    client.post = AsyncMock(return_value=_response(post_json or {}))
    client.aclose = AsyncMock()
    return client


class TestGistClient:
    async def test_create(self) -> None:
        mock = _mock_httpx_client(post_json={"id": "f00"})
        with patch("playground.gist.httpx.AsyncClient", return_value=mock) as ctor:
            async with GistClient("secret") as gists:
                gist_id = await gists.create({"main.nr": "fn main() {}"})

        assert gist_id == "f00"
        path = mock.post.call_args.args[0]
        payload = mock.post.call_args.kwargs["json"]
        assert path == "/gists"
        assert payload == {"public": False, "files": {"main.nr": {"content": "fn main() {}"}}}
        headers = ctor.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer secret"
        mock.aclose.assert_awaited_once()

    async def test_get(self) -> None:
        mock = _mock_httpx_client(get_json={
            "id": "f00",
            "files": {
                "main.nr": {"filename": "main.nr", "content": "fn main() {}"},
                "Prover.toml": {"filename": "Prover.toml", "content": "x = 1"},
            },
        })
        with patch("playground.gist.httpx.AsyncClient", return_value=mock):
            async with GistClient("secret") as gists:
                files = await gists.get("f00")

        assert files == {"main.nr": "fn main() {}", "Prover.toml": "x = 1"}
        mock.get.assert_awaited_once_with("/gists/f00")

    async def test_http_error(self) -> None:
        mock = _mock_httpx_client()
        mock.get = AsyncMock(side_effect=httpx.HTTPError("404"))
        with patch("playground.gist.httpx.AsyncClient", return_value=mock):
            async with GistClient("secret") as gists:
                with pytest.raises(GistError, match="failed to fetch gist"):
                    await gists.get("missing")

    async def test_create_without_id(self) -> None:
        mock = _mock_httpx_client(post_json={})
        with patch("playground.gist.httpx.AsyncClient", return_value=mock):
            async with GistClient("secret") as gists:
                with pytest.raises(GistError, match="unexpected response"):
                    await gists.create({"main.nr": "x"})

    async def test_requires_context_manager(self) -> None:
        with pytest.raises(RuntimeError, match="async context manager"):
            await GistClient("secret").get("f00")

    def test_token_not_in_repr(self) -> None:
        client = GistClient("super-secret")
        assert "super-secret" not in repr(client._token)


class TestProjectMapping:
    def test_project_to_files(self) -> None:
        assert project_to_files("fn main() {}", "x = 1") == {
            "main.nr": "fn main() {}",
            "Prover.toml": "x = 1",
        }

    def test_empty_aux_is_omitted(self) -> None:
        assert project_to_files("fn main() {}", "") == {"main.nr": "fn main() {}"}

    def test_files_to_project(self) -> None:
        assert files_to_project({"main.nr": "a", "Prover.toml": "b"}) == ("a", "b")
        assert files_to_project({"main.nr": "a"}) == ("a", "")

    def test_missing_source(self) -> None:
        with pytest.raises(GistError, match="main.nr"):
            files_to_project({"README.md": ""})
