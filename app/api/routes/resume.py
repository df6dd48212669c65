"""
Resume generation endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request

from app.core.logging_config import sanitize_log_data
from app.core.rate_limit import check_rate_limit
from app.llm.provider import LLMProvider
from app.schemas.generation import ResumeGenerationRequest, ResumeGenerationResponse
from app.services.ats_engine import analyze_resume
from app.services.resume_generator import (
    default_provider,
    generate_resume,
    GeneratorUnavailableError,
    ResumeGenerationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resume", tags=["Resume"])

MIN_JOB_DESCRIPTION_LENGTH = 100


def rate_limited(request: Request) -> None:
    check_rate_limit(request)


def validated_request(payload: ResumeGenerationRequest) -> ResumeGenerationRequest:
    """Reject a short job description unless existing resume text is supplied."""
    has_resume_text = bool(payload.resume_text and payload.resume_text.strip())
    job_description = (payload.job_description or "").strip()

    if not has_resume_text and len(job_description) < MIN_JOB_DESCRIPTION_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Job description must be at least {MIN_JOB_DESCRIPTION_LENGTH} characters"
        )
    return payload


def get_llm_provider() -> LLMProvider:
    """LLM provider dependency."""
    try:
        return default_provider()
    except GeneratorUnavailableError as e:
        logger.warning(f"Resume generator unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Resume generation is not configured"
        )


@router.post("/generate", response_model=ResumeGenerationResponse, dependencies=[Depends(rate_limited)])
def generate(
    payload: ResumeGenerationRequest = Depends(validated_request),
    provider: LLMProvider = Depends(get_llm_provider),
):
    """
    Generate a structured resume with AI and score it.

    Requires a job description of at least 100 characters unless existing
    resume text is supplied.
    """
    job_description = (payload.job_description or "").strip()

    try:
        resume = generate_resume(payload, provider=provider)
    except ResumeGenerationError as e:
        logger.error(f"Resume generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate resume. Please try again later."
        )

    logger.debug(f"Generated resume: {sanitize_log_data(resume.model_dump(by_alias=True, exclude_none=True))}")
    report = analyze_resume(resume, job_description or None)
    return ResumeGenerationResponse(resume=resume, ats_report=report)
