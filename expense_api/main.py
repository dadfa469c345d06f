import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from expense_api.config import Settings, configure_logging, get_settings
from expense_api.data.base import Database
from expense_api.domain.services.category_service import seed_default_categories
from expense_api.presentation.category_api import router as categories_router
from expense_api.presentation.errors import register_error_handlers
from expense_api.presentation.transactions_api import router as transactions_router
from expense_api.presentation.user_api import router as auth_router

logger = logging.getLogger("expense_api")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    database = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_tables()
        logger.info("Database ready at %s", database.engine.url.render_as_string())
        for db in database.session():
            seed_default_categories(db)
        yield
        database.dispose()

    app = FastAPI(title="Expense Tracker API", version="1.0.0", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(categories_router)
    app.include_router(transactions_router)
    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
