"""
HTTP API around the palette service.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .colors import is_valid_hex
from .config import Settings, load_settings, parse_bool
from .errors import RequestTimeout
from .harmony import Scheme
from .service import PaletteService

logger = logging.getLogger(__name__)

SERVICE_NAME = "Playwright Palette API"


class PaletteRequest(BaseModel):
    hex: Any = None
    scheme: Any = None
    harmonized: Any = False


def validate_hex(value: Any) -> Optional[str]:
    if not value:
        return "Hex color is required"
    if not is_valid_hex(value):
        return "Invalid hex format. Use #RGB or #RRGGBB format"
    return None


def format_ms(ms: int) -> str:
    return f"{ms}ms" if ms < 1000 else f"{ms / 1000:.2f}s"


def create_app(settings: Optional[Settings] = None, service: Optional[PaletteService] = None) -> FastAPI:
    settings = settings or load_settings()
    service = service or PaletteService(settings)
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s starting (env=%s)", SERVICE_NAME, settings.app_env)
        yield
        await service.shutdown()

    app = FastAPI(title=SERVICE_NAME, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_urls,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def index():
        return {
            "name": SERVICE_NAME,
            "version": __version__,
            "endpoints": {
                "health": "GET /health",
                "generate": "POST /api/generate-palette",
            },
            "example": {
                "method": "POST",
                "path": "/api/generate-palette",
                "body": {"hex": "#3B82F6", "scheme": "analogous", "harmonized": False},
            },
        }

    @app.get("/health")
    async def health():
        ok = await service.health_check()
        return JSONResponse(
            status_code=200 if ok else 500,
            content={
                "status": "ok" if ok else "error",
                "service": SERVICE_NAME,
                "time": datetime.now(timezone.utc).isoformat(),
                "keepBrowserAlive": settings.keep_browser_alive,
                "env": settings.app_env,
                "uptimeSec": round(time.monotonic() - started),
            },
        )

    @app.post("/api/generate-palette")
    async def generate_palette(body: Optional[PaletteRequest] = None):
        start = time.monotonic()

        def elapsed_ms() -> int:
            return int((time.monotonic() - start) * 1000)

        if body is None:
            body = PaletteRequest()
        error = validate_hex(body.hex)
        if error:
            return JSONResponse(status_code=400, content={"success": False, "error": error})

        scheme = Scheme.parse(body.scheme)
        harmonized = parse_bool(body.harmonized)

        try:
            palette = await service.generate_palette(body.hex, scheme, harmonized=harmonized)
        except RequestTimeout:
            duration = elapsed_ms()
            return JSONResponse(
                status_code=408,
                headers={"X-Processing-Time": str(duration)},
                content={
                    "success": False,
                    "error": "Request timed out",
                    "metadata": {"processingTimeMs": duration, "processingTime": format_ms(duration)},
                },
            )
        except Exception as exc:
            logger.exception("Palette generation error")
            duration = elapsed_ms()
            return JSONResponse(
                status_code=500,
                headers={"X-Processing-Time": str(duration)},
                content={
                    "success": False,
                    "error": "Palette generation failed",
                    "message": str(exc) or "Unknown error",
                    "metadata": {"processingTimeMs": duration, "processingTime": format_ms(duration)},
                },
            )

        duration = elapsed_ms()
        data = palette.to_dict()
        return JSONResponse(
            headers={"X-Processing-Time": str(duration)},
            content={
                "success": True,
                "data": data,
                "metadata": {
                    "generatedAt": datetime.now(timezone.utc).isoformat(),
                    "processingTimeMs": duration,
                    "processingTime": format_ms(duration),
                    "inputHex": body.hex,
                    "inputScheme": scheme.value,
                    "harmonized": harmonized,
                    "counts": {
                        "accentLight": len(data["accentScale"]["light"]),
                        "accentDark": len(data["accentScale"]["dark"]),
                        "grayLight": len(data["grayScale"]["light"]),
                        "grayDark": len(data["grayScale"]["dark"]),
                    },
                    "fallbackSteps": palette.fallback_steps,
                    "degraded": palette.degraded,
                    "worker": "parallel" if settings.parallel else "sequential",
                    "keepBrowserAlive": settings.keep_browser_alive,
                    "env": settings.app_env,
                    "pid": os.getpid(),
                },
            },
        )

    return app
