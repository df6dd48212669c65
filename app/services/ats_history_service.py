"""
ATS scan history service.

Persists ATS reports and reads them back for the history endpoints.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.db.models.ats_scan import ATSScan
from app.schemas.ats import ATSReport
from app.schemas.resume import Resume

logger = logging.getLogger(__name__)


def save_scan(
    db: Session,
    resume: Resume,
    report: ATSReport,
    job_description: Optional[str] = None,
) -> ATSScan:
    """
    Store an ATS report together with the resume it scored.

    Returns:
        The persisted ATSScan row (refreshed, with id and created_at)
    """
    scan = ATSScan(
        overall_score=report.overall_score,
        rating=report.rating,
        job_description=job_description or None,
        resume=resume.model_dump(mode="json", by_alias=True, exclude_none=True),
        categories=report.categories.model_dump(mode="json", by_alias=True),
    )
    db.add(scan)
    db.commit()
    db.refresh(scan)

    logger.info(f"ATS scan saved: scan_id={scan.id}, overall_score={scan.overall_score}")
    return scan


def list_scans(db: Session, page: int = 1, page_size: int = 20) -> Tuple[List[ATSScan], int]:
    """
    List saved scans, newest first.

    Returns:
        Tuple of (scans on the requested page, total number of scans)
    """
    query = db.query(ATSScan)
    total = query.count()

    offset = (page - 1) * page_size
    scans = query.order_by(desc(ATSScan.created_at), desc(ATSScan.id)).offset(offset).limit(page_size).all()

    logger.debug(f"ATS scans listed: total={total}, page={page}")
    return scans, total


def get_scan(db: Session, scan_id: int) -> Optional[ATSScan]:
    """Fetch one saved scan, or None if it does not exist."""
    return db.query(ATSScan).filter(ATSScan.id == scan_id).first()
