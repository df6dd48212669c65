"""
ATS scoring endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from sqlalchemy.orm import Session

from app.core.ats_rules import ATS_CATEGORIES
from app.core.rate_limit import check_rate_limit
from app.db.session import get_db
from app.schemas.ats import (
    ATSAnalyzeRequest,
    ATSAnalyzeResponse,
    ATSCategoryInfo,
    ATSScanDetail,
    ATSScanListResponse,
    ATSScanSummary,
)
from app.services.ats_engine import analyze_resume
from app.services.ats_history_service import save_scan, list_scans, get_scan

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ats", tags=["ATS"])


def rate_limited(request: Request) -> None:
    check_rate_limit(request)


@router.post("/analyze", response_model=ATSAnalyzeResponse, dependencies=[Depends(rate_limited)])
def analyze(payload: ATSAnalyzeRequest, db: Session = Depends(get_db)):
    """
    Score a structured resume, optionally against a job description.

    Set `save` to store the scan in history; the response then carries `reportId`.
    """
    report = analyze_resume(payload.resume, payload.job_description)
    response = ATSAnalyzeResponse(**report.model_dump())

    if payload.save:
        try:
            scan = save_scan(db, payload.resume, report, payload.job_description)
        except Exception as e:
            logger.error(f"Failed to save ATS scan: {e}", exc_info=True)
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save ATS scan"
            )
        response.report_id = scan.id

    logger.info(f"ATS analyze: overall_score={report.overall_score}, saved={payload.save}")
    return response


@router.get("/categories", response_model=List[ATSCategoryInfo])
def categories():
    """Describe the five ATS categories and how to improve each."""
    return [ATSCategoryInfo(**category) for category in ATS_CATEGORIES]


@router.get("/reports", response_model=ATSScanListResponse)
def get_reports(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db),
):
    """List saved ATS scans, newest first."""
    scans, total = list_scans(db, page=page, page_size=page_size)
    return ATSScanListResponse(
        scans=[ATSScanSummary.model_validate(scan) for scan in scans],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/reports/{report_id}", response_model=ATSScanDetail)
def get_report(report_id: int, db: Session = Depends(get_db)):
    """Fetch one saved ATS scan with its full report."""
    scan = get_scan(db, report_id)
    if not scan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="ATS report not found"
        )
    return ATSScanDetail.model_validate(scan)
