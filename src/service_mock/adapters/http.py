from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from service_mock.adapters.local_host import LocalRuntime
from service_mock.errors import TerminalError, UnknownHandlerError, UnknownServiceError

logger = logging.getLogger(__name__)


def create_app(runtime: LocalRuntime) -> FastAPI:
    # HTTP front over the local host: discovery plus ingress-style invocation routes.
    app = FastAPI(title="Service mock")

    @app.get("/discover")
    async def discover() -> JSONResponse:
        return JSONResponse(content=runtime.endpoint.discover())

    @app.post("/{service}/{handler}")
    async def invoke_service(service: str, handler: str, request: Request) -> Response:
        return await _invoke(runtime, service, handler, None, await request.body())

    @app.post("/{service}/{key}/{handler}")
    async def invoke_keyed(service: str, key: str, handler: str, request: Request) -> Response:
        return await _invoke(runtime, service, handler, key, await request.body())

    return app


async def _invoke(runtime: LocalRuntime, service: str, handler: str, key: str | None, body: bytes) -> Response:
    # Only the routed service/handler maps to 404; lookups failing inside a step are handler failures.
    try:
        runtime.endpoint.handler_type(service, handler)
    except (UnknownServiceError, UnknownHandlerError) as exc:
        return JSONResponse(status_code=404, content={"message": str(exc)})

    try:
        result = await runtime.invoke(service, handler, body or b"null", key)
    except TerminalError as exc:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
    except Exception as exc:
        logger.exception("Invocation of %s/%s failed", service, handler)
        return JSONResponse(status_code=500, content={"message": str(exc)})
    # Results are already JSON encoded by the handler.
    return Response(content=result, media_type="application/json")
