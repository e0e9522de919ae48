import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.auth import router as auth_router
from api.catalog import router as catalog_router
from api.health import router as health_router
from api.profile import router as profile_router
from api.ratings import router as ratings_router
from api.watchlist import router as watchlist_router
from clients.identity import IdentityError, identity_client
from config import settings
from core.database import engine
from models import Base

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "%s ready: catalog=%s identity=%s",
        settings.APP_NAME,
        settings.TMDB_BASE_URL,
        settings.IDENTITY_URL,
    )

    yield
    await identity_client.aclose()
    await engine.dispose()


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(IdentityError)
async def identity_error_handler(request: Request, exc: IdentityError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "code": exc.code},
    )


app.include_router(health_router)
app.include_router(catalog_router)
app.include_router(auth_router)
app.include_router(watchlist_router)
app.include_router(ratings_router)
app.include_router(profile_router)
