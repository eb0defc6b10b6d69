"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import engine
from app.errors import FilesManagerError
from app.models import Base

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release the connection pool on shutdown."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready, blobs stored under %s", settings.FOLDER_PATH)

    yield

    await engine.dispose()


app = FastAPI(
    title="Files Manager API",
    version="1.0.0",
    description="Personal file storage: folders, files and images per user.",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FilesManagerError)
async def files_manager_error_handler(request: Request, exc: FilesManagerError):
    """Render service errors as {"error": message} with their status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Register routers
from app.routes.app_status import router as status_router
from app.routes.users import router as users_router
from app.routes.files import router as files_router
app.include_router(status_router)
app.include_router(users_router)
app.include_router(files_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.API_PORT)
