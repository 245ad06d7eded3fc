from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware  # type: ignore[import-not-found]
from fastapi.staticfiles import StaticFiles  # type: ignore[import-not-found]

from roopsnap.api.exceptions import configure_global_exception_handlers
from roopsnap.api.routers import configure_routers
from roopsnap.auth.bootstrap import ensure_bootstrap_user
from roopsnap.auth.depends import get_auth_service
from roopsnap.core.db import database_manager
from roopsnap.core.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Path(settings.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
    if settings.AUTH_BOOTSTRAP_ENABLED:
        await database_manager.initialize()
        async with database_manager.session() as session:
            await ensure_bootstrap_user(session, svc=get_auth_service(), settings=settings)
    yield
    await database_manager.shutdown()


def _cors_origins() -> list[str]:
    # Be forgiving about localhost vs 127.0.0.1, since devs commonly use either.
    raw_origins = [o.strip() for o in str(settings.CORS_ORIGINS).split(",") if o.strip()]
    origins: list[str] = []
    for o in raw_origins:
        origins.append(o)
        if o.startswith("http://localhost:"):
            origins.append(o.replace("http://localhost:", "http://127.0.0.1:", 1))
        elif o.startswith("http://127.0.0.1:"):
            origins.append(o.replace("http://127.0.0.1:", "http://localhost:", 1))
    # De-dupe while preserving order.
    seen: set[str] = set()
    return [o for o in origins if not (o in seen or seen.add(o))]


def build_app() -> FastAPI:
    app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION, lifespan=lifespan)
    origins = _cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    configure_routers(app)
    configure_global_exception_handlers(app)
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
        name="uploads",
    )
    return app


app = build_app()
