from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_service import __version__
from order_service.api.routes_bills import router as bills_router
from order_service.api.routes_orders import router as orders_router
from order_service.api.routes_products import router as products_router
from order_service.core.config import get_settings
from order_service.core.logging import configure_logging
from order_service.domain.errors import NotFoundError, ValidationError
from order_service.persistence.db import init_db

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name, version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("order service ready: env=%s bill_policy=%s", settings.env, settings.bill_policy)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.debug(
        "request: method=%s host=%s url=%s useragent=%s",
        request.method,
        request.headers.get("host"),
        request.url.path,
        request.headers.get("user-agent"),
    )
    return await call_next(request)


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"data": [e.to_dict() for e in exc.errors]})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(_: Request, exc: RequestValidationError):
    data = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix; the key is the field path.
        loc = [str(part) for part in error.get("loc", ())][1:]
        data.append({"message": error.get("msg", "invalid value"), "context": {"key": ".".join(loc)}})
    return JSONResponse(status_code=400, content={"data": data})


@app.exception_handler(NotFoundError)
async def not_found_handler(_: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=404,
        content={
            "detail": str(exc),
            "error": "not_found",
        },
    )


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(products_router)
app.include_router(orders_router)
app.include_router(bills_router)
