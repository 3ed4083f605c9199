"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from calorie_lookup.app_logging import configure_logging
from calorie_lookup.containers import AppContainer

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def add_cors_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.options("/api/food")
    async def food_preflight() -> Response:
        """Answer CORS preflight requests."""
        return Response(status_code=status.HTTP_200_OK)

    @app.get("/api/food", response_model=None)
    async def food_lookup(
        request: Request, q: str | None = None
    ) -> dict[str, object] | JSONResponse:
        """Return candidate foods with kcal per 100 g for a query."""
        if not q or not q.strip():
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Missing q"},
            )
        state_container: AppContainer = request.app.state.container
        records = await state_container.lookup_service.lookup(q)
        if state_container.settings.debug:
            logger.info("Food lookup: query=%s results=%s", q, len(records))
        return {"items": [asdict(record) for record in records]}

    return app
