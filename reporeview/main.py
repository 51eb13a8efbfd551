"""RepoReview Main Application"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from reporeview.api.routes import router as api_router
from reporeview.errors import InputError, RepoReviewError
import config

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Starting RepoReview...")
    logger.info(f"Fact provider: {config.FACT_PROVIDER}")
    logger.info(f"Working directory: {config.WORK_DIR}")
    yield
    logger.info("Shutting down RepoReview...")


app = FastAPI(
    title="RepoReview",
    description="Repository quality scoring and improvement roadmaps",
    version=config.VERSION,
    lifespan=lifespan
)


@app.exception_handler(RepoReviewError)
async def repo_review_error_handler(request: Request, exc: RepoReviewError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = InputError("Invalid request body", details="Expected a JSON object with a repoUrl string")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": config.VERSION}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "reporeview.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG
    )
