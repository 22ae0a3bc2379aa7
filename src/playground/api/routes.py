"""FastAPI routes.

Endpoints (under the configured prefix, ``/api`` by default):

- POST /{channel}/check|compile|execute  - run nargo, returns {compiler, stdout, stderr}
- POST /{channel}/fmt                    - format source, returns {code}
- GET  /{channel}/version                - toolchain version, returns {version}
- POST /gist                             - store a project, returns {id}
- GET  /gist/{gist_id}                   - load a project, returns {code, input}
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from playground.config import Settings
from playground.gist import GistClient, files_to_project, project_to_files
from playground.runtime.commands import Command, Options
from playground.runtime.errors import GistError, RequestValidationError
from playground.runtime.service import (
    EvalResponse,
    Files,
    FormatResponse,
    PlaygroundService,
    VersionResponse,
)

router = APIRouter()


class GistCreated(BaseModel):
    id: str


def get_service(request: Request) -> PlaygroundService:
    return request.app.state.service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_options(request: Request) -> Options:
    """Parse the kebab-case toggles from the query string."""
    try:
        return Options.from_query(dict(request.query_params))
    except ValidationError as exc:
        raise RequestValidationError(f"invalid options: {exc.errors()[0]['msg']}") from exc


Service = Annotated[PlaygroundService, Depends(get_service)]
QueryOptions = Annotated[Options, Depends(get_options)]


# Gist routes are registered first so "/gist/{id}" is not read as a channel.
@router.post("/gist", response_model=GistCreated)
async def create_gist(files: Files, settings: Annotated[Settings, Depends(get_settings)]) -> GistCreated:
    async with _gist_client(settings) as gists:
        gist_id = await gists.create(project_to_files(files.code, files.input))
    return GistCreated(id=gist_id)


@router.get("/gist/{gist_id}", response_model=Files)
async def load_gist(gist_id: str, settings: Annotated[Settings, Depends(get_settings)]) -> Files:
    async with _gist_client(settings) as gists:
        code, aux = files_to_project(await gists.get(gist_id))
    return Files(code=code, input=aux)


@router.get("/{channel}/version", response_model=VersionResponse)
async def version(channel: str, service: Service) -> VersionResponse:
    return await service.version(channel)


@router.post("/{channel}/check", response_model=EvalResponse)
async def check(channel: str, files: Files, options: QueryOptions, service: Service) -> EvalResponse:
    return await service.evaluate(channel, Command.CHECK, files, options)


@router.post("/{channel}/compile", response_model=EvalResponse)
async def compile_program(channel: str, files: Files, options: QueryOptions, service: Service) -> EvalResponse:
    return await service.evaluate(channel, Command.COMPILE, files, options)


@router.post("/{channel}/execute", response_model=EvalResponse)
async def execute(channel: str, files: Files, options: QueryOptions, service: Service) -> EvalResponse:
    return await service.evaluate(channel, Command.EXECUTE, files, options)


@router.post("/{channel}/fmt", response_model=FormatResponse)
async def fmt(channel: str, files: Files, service: Service) -> FormatResponse:
    return await service.format_source(channel, files)


def _gist_client(settings: Settings) -> GistClient:
    if settings.github_token is None:
        raise GistError("gist storage is not configured")
    return GistClient(settings.github_token, base_url=settings.github_api_url)
