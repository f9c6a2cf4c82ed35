"""
Alcateia Hits auth & subscription API.
"""
from dotenv import load_dotenv
load_dotenv()

import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from alcateia_auth.api.routes import content, email, producer_sessions, subscriptions, users, webhooks
from alcateia_auth.db.base import Base
from alcateia_auth.db.session import engine, SQLALCHEMY_DATABASE_URL
from alcateia_auth.middleware.cors import cors_middleware
# Import all models to ensure they're registered with Base
from alcateia_auth.models import User, Subscription, SubscriptionFeature, ProducerSession, ContentAccess, EmailLog  # noqa: F401

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

logger = logging.getLogger(__name__)

WEBHOOKS_PREFIX = "/api/webhooks/"


def run_migrations() -> bool:
    """Run Alembic migrations to head. Returns False when no alembic.ini is shipped."""
    project_root = Path(__file__).resolve().parent.parent
    alembic_ini = project_root / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found, skipping Alembic migrations")
        return False
    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", SQLALCHEMY_DATABASE_URL)
    alembic_cfg.attributes["configure_logger"] = False
    command.upgrade(alembic_cfg, "head")
    logger.info("Alembic migrations completed successfully")
    return True


app = FastAPI(title="Alcateia Hits Auth")


@app.on_event("startup")
def startup_event():
    """Bring the schema up to date. Fails startup if migrations fail."""
    try:
        if not run_migrations():
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created")
    except Exception:
        logger.exception("Database setup failed (server will not start)")
        raise


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Dados inválidos",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched routes answer in plain text; handler errors keep their detail.
    # A wrong method is just another unmatched route, except on the webhook.
    if exc.status_code == 405:
        if request.url.path.startswith(WEBHOOKS_PREFIX):
            return PlainTextResponse(str(exc.detail), status_code=405, headers=exc.headers)
        return PlainTextResponse("Not Found", status_code=404)
    if exc.status_code == 404 and exc.detail == "Not Found":
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


app.middleware("http")(cors_middleware)

# Register routers
app.include_router(email.router, prefix="/api/email", tags=["Email"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(subscriptions.router, prefix="/api/subscriptions", tags=["Subscriptions"])
app.include_router(producer_sessions.router, prefix="/api/producer-sessions", tags=["Producer Sessions"])
app.include_router(content.router, prefix="/api/content", tags=["Content"])
app.include_router(webhooks.router, prefix="/api/webhooks", tags=["Webhooks"])
