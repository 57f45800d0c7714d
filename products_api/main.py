from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from products_api import docs
from products_api.api.routes import products
from products_api.config import settings
from products_api.database import close_db, connect_db, init_db
from products_api.errors import register_exception_handlers
from products_api.logging_config import setup_logging
from products_api.middleware import setup_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and connect the database on startup."""
    setup_logging(settings.log_level, settings.log_format)
    init_db(settings.database_url, echo=settings.debug)
    # The API keeps serving even if the database is unreachable.
    await connect_db()
    logger.info("Products API started")
    yield
    await close_db()
    logger.info("Products API shut down")


app = FastAPI(
    title=docs.TITLE,
    description=docs.DESCRIPTION,
    version=docs.VERSION,
    openapi_tags=docs.OPENAPI_TAGS,
    docs_url=None,
    lifespan=lifespan,
)

setup_middleware(app, settings.frontend_url)
register_exception_handlers(app)

app.include_router(products.router)


@app.get("/docs", include_in_schema=False)
async def swagger_ui():
    return docs.swagger_ui_page(app.openapi_url)


@app.get("/", include_in_schema=False)
async def root():
    return {"message": docs.TITLE, "docs": "/docs"}
