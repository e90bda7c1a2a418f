import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from core.exceptions import ConversationStoreException, DatabaseError
from core.logging import configure_logging
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

configure_logging(SETTINGS.APP.LOG_LEVEL, SETTINGS.APP.JSON_LOGS)

logger = structlog.get_logger("api.main")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("app.startup.begin")
    start_time = time.time()

    try:
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        await db_resource.execute_query("SELECT 1")
        logger.info(
            "app.startup.database_ready",
            elapsed=f"{time.time() - start_time:.2f}s",
        )
    except Exception as e:
        logger.exception("app.startup.failed", error=str(e))
        raise

    yield

    try:
        db_resource = _app.container.infrastructure.database()
        if db_resource:
            await db_resource.shutdown()
        logger.info("app.shutdown.complete")
    except Exception as e:
        logger.exception("app.shutdown.failed", error=str(e))


def create_fastapi_app() -> CustomFastAPI:
    _app = CustomFastAPI(
        title="Conversation Store API",
        description="Stores and serves chat conversation messages",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    _app.container = DependencyContainer()
    _app.container.init_resources()

    _app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.features.conversation_messages.router import router as messages_router

    _app.include_router(
        messages_router, prefix="/api/v1/conversations", tags=["Conversations"]
    )

    return _app


app = create_fastapi_app()


@app.get("/")
async def root():
    return {"message": "Conversation Store API is running", "status": "ok"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "detail": f"{exc.detail} : {request.url}",
            "status_code": 404,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Validation Error", "detail": str(exc), "status_code": 422},
    )


@app.exception_handler(ConversationStoreException)
async def store_exception_handler(request: Request, exc: ConversationStoreException):
    status_code = 503 if isinstance(exc, DatabaseError) else 500
    logger.error("app.request.failed", error_code=exc.error_code, error=exc.message)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.error_code,
            "detail": exc.message,
            "status_code": status_code,
        },
    )
