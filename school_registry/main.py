"""FastAPI application for student re-registration and ID cards."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from school_registry.accounts.routes import router as accounts_router
from school_registry.accounts.service import AccountService
from school_registry.cards.routes import router as cards_router
from school_registry.db import SessionLocal, create_tables, get_engine
from school_registry.errors import SchoolRegistryError, registry_error_handler
from school_registry.logger import setup_logging
from school_registry.metrics import router as metrics_router
from school_registry.numbering.routes import router as numbering_router
from school_registry.settings import settings
from school_registry.students.routes import router as students_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    engine = get_engine()
    if settings.auto_create_tables:
        create_tables(engine)

    db = SessionLocal(bind=engine)
    try:
        AccountService(db).ensure_admin_account()
    finally:
        db.close()

    logger.info("Student re-registration and ID card API is ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="School Registry",
        description="API daftar ulang siswa dan kartu pelajar",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(SchoolRegistryError, registry_error_handler)

    # Observability
    app.include_router(metrics_router)  # exposes GET /metrics

    # Functional routers
    app.include_router(accounts_router)
    app.include_router(students_router)
    app.include_router(cards_router)
    app.include_router(numbering_router)

    # Uploaded photos; the directory is created on startup
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def healthcheck():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/")
    async def root():
        return {"message": "API daftar ulang siswa dan kartu pelajar", "version": "1.0.0"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
