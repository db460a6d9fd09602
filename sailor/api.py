"""
HTTP endpoint for the web page.

    GET /api/sailor-proxy?provider=static|scrapingbee

Returns the service envelope with status 200 on success and 500 otherwise.
CORS is open to any origin because the page is served from a different host.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from sailor import config
from sailor.providers import make_provider
from sailor.service import SailorService, utc_timestamp

logger = logging.getLogger(__name__)

app = FastAPI(title="Sailor Schedule")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.options("/api/sailor-proxy")
def sailor_proxy_options():
    # Any OPTIONS request is answered, not only CORS preflights
    return Response(status_code=200)


@app.api_route("/api/sailor-proxy", methods=["GET", "POST"])
def sailor_proxy(provider: str = Query(config.DEFAULT_PROVIDER)):
    try:
        service = SailorService(make_provider(provider))
        result = service.get_sailing_events()
    except Exception as exc:
        logger.exception("Unexpected error in sailor-proxy")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(exc),
                "message": "Internal server error",
                "timestamp": utc_timestamp(),
            },
        )

    status_code = 200 if result["success"] else 500
    return JSONResponse(status_code=status_code, content=result)


def serve(host: str = "127.0.0.1", port: int = 8000) -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    uvicorn.run(app, host=host, port=port)
