import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import config
from backend.api.routes import router as routes_router
from border_routes.route_finder import RouteFinder

# Configure unified logging to match border_routes style
from border_routes.logging_config import setup_logging
setup_logging(level=config.log_level)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info("Starting Border Routes API...")

    # Resolvers are shared so the prefetched table and the live cache survive between requests
    app.state.route_finder = RouteFinder.from_config(config, shared_resolvers=True)
    logger.info(f"RouteFinder created (default mode: {config.resolver_mode.value})")

    yield

    logger.info("Border Routes API shutdown complete")


app = FastAPI(
    title="Border Routes API",
    description="Shortest land-border routes between countries",
    version=API_VERSION,
    lifespan=lifespan
)

app.include_router(routes_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "border-routes-api",
        "version": API_VERSION,
        "default_mode": config.resolver_mode.value,
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred"
        }
    )


def run():
    uvicorn.run(
        "backend.main:app",
        host=config.host,
        port=config.port,
        log_level="info"
    )


if __name__ == "__main__":
    run()
