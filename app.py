import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from db import create_db_and_tables
from exceptions.base import StorefrontException
from web.api_router import api_router
from web.product_router import product_router
from web.user_router import user_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    await create_db_and_tables()
    logging.info(f"[Startup] Database ready (data/{config.DB_NAME})")
    yield
    logging.warning('Shutting down..')


app = FastAPI(lifespan=lifespan)

if config.WEBAPP_CORS_ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.WEBAPP_CORS_ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )
    logging.info(f"[Startup] CORS middleware enabled for origins: {config.WEBAPP_CORS_ALLOWED_ORIGINS}")
else:
    logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

app.include_router(api_router)
app.include_router(product_router)
app.include_router(user_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.exception_handler(StorefrontException)
async def storefront_exception_handler(request: Request, exc: StorefrontException):
    logging.error(f"[API] Unhandled {exc!r} on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"message": exc.message},
    )
