import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import CLIENT_ORIGINS, HOST, LOG_LEVEL, PORT
from app.database import create_db_and_tables
from app.errors import (
    ServiceError,
    service_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
log = logging.getLogger("ecotrack")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create database tables
    create_db_and_tables()
    log.info("EcoTrack server ready")
    yield


# Initialize FastAPI app
app = FastAPI(
    title="EcoTrack API",
    description="Join sustainability challenges and track your progress",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CLIENT_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Include routers
from app.routers import challenges, activities, content

app.include_router(challenges.router)
app.include_router(activities.router)
app.include_router(content.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "EcoTrack server"


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
