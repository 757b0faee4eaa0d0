"""
Resource Search Service
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import sys

from config import settings
from router.search import router as search_router
from utils.database import close_pool
from utils.errors import SearchError, InvalidRequest

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown handler"""
    logger.info("Resource Search Service starting up...")
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    logger.info(f"Embedding model: {settings.embedding_model}")
    logger.info(f"Max page size: {settings.max_page_size}")
    yield
    logger.info("Resource Search Service shutting down...")
    await close_pool()


# Create FastAPI app
app = FastAPI(
    title="Resource Search Service",
    description="Keyword, filtered and semantic search over catalogued educational resources",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(search_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Resource Search Service",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "resource-search",
        "version": "1.0.0"
    }


@app.exception_handler(SearchError)
async def search_exception_handler(request: Request, exc: SearchError):
    """Map search failures to client or server errors"""
    if isinstance(exc, InvalidRequest):
        logger.warning(f"Rejected search request ({exc.field}): {exc.message}")
    else:
        logger.error(f"Search failed [{exc.code}]: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": str(exc) if settings.debug else "An error occurred while searching"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level
    )
