"""Method-dispatched HTTP surface for aluno records.

A single endpoint receives every verb on ``/<FUNCTION_NAME>`` and
``/<FUNCTION_NAME>/<id>``.  The last non-empty path segment is the aluno id
unless it is the function name itself.  ``(method, has_id)`` selects the
controller action from ``ROUTE_TABLE``; unknown combinations get a
"method not allowed" envelope without a store client ever being created.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import Receive, Scope, Send

from app.core.config import settings
from app.core.constants import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    MSG_ERRO_INTERNO,
    MSG_METODO_NAO_PERMITIDO,
)
from app.db.supabase import create_supabase
from app.models.response import ApiResponse
from app.services.alunos import AlunosService
from app.services.controller import AlunosController

logger = logging.getLogger(__name__)

Action = Callable[[AlunosController, str | None, Request], Awaitable[ApiResponse]]


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

async def _listar(controller: AlunosController, aluno_id: str | None, request: Request) -> ApiResponse:
    return controller.listar()


async def _buscar(controller: AlunosController, aluno_id: str | None, request: Request) -> ApiResponse:
    return controller.buscar(aluno_id)


async def _criar(controller: AlunosController, aluno_id: str | None, request: Request) -> ApiResponse:
    body = await request.json()
    return controller.criar(body)


async def _atualizar(controller: AlunosController, aluno_id: str | None, request: Request) -> ApiResponse:
    body = await request.json()
    return controller.atualizar(aluno_id, body)


async def _deletar(controller: AlunosController, aluno_id: str | None, request: Request) -> ApiResponse:
    return controller.deletar(aluno_id)


# PUT/PATCH/DELETE without an id still reach the controller so the caller
# gets the "ID do aluno é obrigatório" envelope.
ROUTE_TABLE: dict[tuple[str, bool], Action] = {
    ("GET", False): _listar,
    ("GET", True): _buscar,
    ("POST", False): _criar,
    ("POST", True): _criar,
    ("PUT", False): _atualizar,
    ("PUT", True): _atualizar,
    ("PATCH", False): _atualizar,
    ("PATCH", True): _atualizar,
    ("DELETE", False): _deletar,
    ("DELETE", True): _deletar,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def extract_aluno_id(path: str, function_name: str | None = None) -> str | None:
    """Return the id embedded in *path*, or ``None`` for the collection."""
    function_name = function_name or settings.FUNCTION_NAME
    segments = [p for p in path.split("/") if p]
    if not segments or segments[-1] == function_name:
        return None
    return segments[-1]


def cors_headers(request: Request) -> dict[str, str]:
    """Return the cross-origin headers attached to every response."""
    origins = settings.allowed_origins
    headers = {
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
        return headers

    origin = request.headers.get("origin")
    headers["Access-Control-Allow-Origin"] = origin if origin in origins else origins[0]
    headers["Vary"] = "Origin"
    return headers


def route_paths(function_name: str | None = None) -> list[str]:
    """Return the URL patterns served by ``handle_request``."""
    function_name = function_name or settings.FUNCTION_NAME
    return [f"/{function_name}", f"/{function_name}/{{rest:path}}"]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

async def handle_request(request: Request) -> Response:
    """Dispatch one request to the matching controller action."""
    headers = cors_headers(request)

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=headers)

    try:
        logger.info("%s %s", request.method, request.url.path)

        aluno_id = extract_aluno_id(request.url.path)
        action = ROUTE_TABLE.get((request.method, aluno_id is not None))

        if action is None:
            result = ApiResponse(success=False, message=MSG_METODO_NAO_PERMITIDO)
        else:
            controller = AlunosController(AlunosService(create_supabase()))
            result = await action(controller, aluno_id, request)

        return JSONResponse(
            content=result.to_payload(),
            status_code=result.status_code,
            headers=headers,
        )

    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            content=ApiResponse(
                success=False,
                message=MSG_ERRO_INTERNO,
                error=str(exc),
            ).to_payload(),
            status_code=500,
            headers=headers,
        )


class AlunosEndpoint:
    """ASGI wrapper around ``handle_request``.

    Starlette limits plain function endpoints to GET when no methods are
    given; an ASGI callable is routed for every verb, so OPTIONS and
    arbitrary methods reach ``handle_request`` too.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await handle_request(request)
        await response(scope, receive, send)


endpoint = AlunosEndpoint()
