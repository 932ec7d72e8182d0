import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal.config import settings
from portal.errors import PortalError, ValidationError
from portal.logging_config import configure_logging
from portal.api.routes.quiz_routes import quiz_router
from portal.api.routes.result_routes import results_router
from portal.api.routes.leaderboard_routes import leaderboard_router
from portal.api.routes.admin_routes import admin_router
from portal.db.database import init_indexes, client

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    await init_indexes()
    logger.info(f"{settings.APP_NAME} started, database {settings.DATABASE_NAME}")
    yield
    # shutdown
    await client.close()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan, root_path=settings.ROOT_PATH)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed bodies and params share the validation kind with service level checks
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    error = ValidationError(f"{where}: {first.get('msg', 'invalid request')}")
    return JSONResponse(status_code=error.status_code, content={"error": error.to_dict()})


app.include_router(quiz_router)
app.include_router(results_router)
app.include_router(leaderboard_router)
app.include_router(admin_router)


@app.get("/health")
def health():
    return {"status": "ok"}
