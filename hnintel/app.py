"""
FastAPI application for the HN Intel agent.

Serves the entrypoint manifest and one invoke route per registered
entrypoint. A single httpx.AsyncClient is shared by all requests.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import httpx
from fastapi import Body, FastAPI, HTTPException, Request
from pydantic import ValidationError

from hnintel.config import Settings, settings as default_settings
from hnintel.entrypoints import ENTRYPOINTS, StoryNotFound, get_entrypoint, invoke
from hnintel.hackernews import UpstreamError
from hnintel.models import utc_now_iso

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, client: httpx.AsyncClient | None = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to serve with; the process-wide settings
            when omitted.
        client: Upstream HTTP client. When omitted, one is opened on startup
            and closed on shutdown.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting %s v%s", settings.agent_name, settings.agent_version)
        if client is not None:
            app.state.http_client = client
            yield
            return

        async with httpx.AsyncClient(timeout=settings.request_timeout) as owned:
            app.state.http_client = owned
            yield
        logger.info("Shut down %s", settings.agent_name)

    app = FastAPI(
        title=settings.agent_name,
        version=settings.agent_version,
        description=settings.agent_description,
        lifespan=lifespan,
    )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, Any]:
        return {
            "status": "healthy",
            "service": settings.agent_name,
            "version": settings.agent_version,
            "timestamp": utc_now_iso(),
        }

    @app.get("/entrypoints", tags=["entrypoints"])
    async def manifest() -> dict[str, Any]:
        """Describe every entrypoint with its price and input schema."""
        return {
            "name": settings.agent_name,
            "version": settings.agent_version,
            "description": settings.agent_description,
            "payments": {
                "payTo": settings.payments_pay_to,
                "network": settings.payments_network,
                "currency": settings.payments_currency,
            },
            "entrypoints": [
                {
                    "key": ep.key,
                    "description": ep.description,
                    "price": ep.price,
                    "free": ep.free,
                    "inputSchema": ep.input_model.model_json_schema(),
                }
                for ep in ENTRYPOINTS
            ],
        }

    @app.post("/entrypoints/{key}/invoke", tags=["entrypoints"])
    async def invoke_entrypoint(
        key: str,
        request: Request,
        payload: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, Any]:
        entrypoint = get_entrypoint(key)
        if entrypoint is None:
            raise HTTPException(status_code=404, detail=f"Unknown entrypoint: {key}")

        started = time.perf_counter()
        try:
            output = await invoke(request.app.state.http_client, entrypoint, payload)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors(include_url=False))
        except StoryNotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except UpstreamError as exc:
            logger.warning("Entrypoint '%s' failed upstream: %s (%s)", key, exc, exc.url)
            raise HTTPException(status_code=502, detail=str(exc))
        except httpx.TransportError as exc:
            logger.warning("Entrypoint '%s' could not reach upstream: %s", key, exc)
            raise HTTPException(status_code=502, detail="Upstream request failed")

        logger.info(
            "Invoked '%s' (price %d) in %.2fs",
            key,
            entrypoint.price,
            time.perf_counter() - started,
        )
        return {"output": output}

    return app
