"""API Routes for RepoReview"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from reporeview.analyzer import AnalysisPipeline
from reporeview.errors import InfrastructureError, RepoReviewError

logger = logging.getLogger(__name__)
router = APIRouter()


# ============== Pydantic Models ==============

class AnalyzeRequest(BaseModel):
    repoUrl: Optional[Any] = None


class CategoryScore(BaseModel):
    score: int
    maxScore: int


class AnalysisResponse(BaseModel):
    overallScore: int
    skillLevel: str
    badge: str
    summary: str
    roadmap: List[str]
    scores: Dict[str, CategoryScore]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# ============== Dependencies ==============

def get_pipeline() -> AnalysisPipeline:
    """One stateless pipeline per request"""
    return AnalysisPipeline()


# ============== Analysis Endpoints ==============

@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_repository(
    request: AnalyzeRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
):
    """Analyze a repository and return its quality report"""
    logger.info(f"Received request to analyze: {request.repoUrl}")

    try:
        report = await pipeline.analyze(request.repoUrl)
    except RepoReviewError as e:
        logger.warning(f"Analysis of {request.repoUrl} failed: {e.message} ({e.details})")
        raise
    except Exception as e:
        logger.exception(f"Error analyzing repository: {e}")
        raise InfrastructureError()

    return report.to_dict()
