"""
FrameBOX API entry point
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from framebox.core.config import settings
from framebox.core.database import init_db, SessionLocal
from framebox.api.v1 import auth, dashboard, categories, clients, catalog, transactions, appointments
from framebox.services.seed_service import seed_defaults

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
ROUTERS = (auth, dashboard, categories, clients, catalog, transactions, appointments)


def prepare_storage():
    """Create the tables and, unless disabled, the default categories and catalog"""
    init_db()
    if not settings.SEED_DEFAULTS:
        return
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("FrameBOX API %s starting (%s)", settings.APP_VERSION, settings.ENVIRONMENT)
    prepare_storage()
    logger.info("Storage ready")
    yield
    logger.info("FrameBOX API stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in ROUTERS:
    app.include_router(module.router, prefix=API_PREFIX)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    # Details stay in the log, the client only learns that the request failed
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred"})


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
