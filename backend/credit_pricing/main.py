import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from credit_pricing import config
from credit_pricing.db.base import Base
from credit_pricing.db.session import build_engine, build_session_factory
from credit_pricing.models import credit_rows  # noqa: F401  registers the table
from credit_pricing.routers.rows import router as rows_router

# --------------------------------------------------
# LOGGING
# --------------------------------------------------
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


# --------------------------------------------------
# DB INIT / TEARDOWN
# --------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = build_engine(app.state.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    try:
        Base.metadata.create_all(bind=app.state.engine)
    except Exception:
        logger.exception("DB init failed")
    yield
    app.state.engine.dispose()


def create_app(
    database_url: str | None = None,
    upload_dir: str | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Credit Pricing API",
        version="1.0.0",
        lifespan=lifespan,
        swagger_ui_parameters={
            "displayRequestDuration": True,
        },
    )
    app.state.database_url = database_url or config.DATABASE_URL
    app.state.upload_dir = upload_dir or config.UPLOAD_DIR

    # --------------------------------------------------
    # CORS
    # --------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.options("/{path:path}")
    def preflight(path: str, request: Request):
        return Response(status_code=204)

    # --------------------------------------------------
    # ROUTERS
    # --------------------------------------------------
    app.include_router(rows_router)

    # --------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app


app = create_app()
