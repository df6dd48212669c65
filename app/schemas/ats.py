"""
Pydantic schemas for ATS scoring endpoints.
"""
from typing import Optional, List, Iterator, Tuple
from datetime import datetime
from pydantic import BaseModel, Field

from app.core.ats_rules import get_rating
from app.schemas.resume import Resume


class ATSCategoryResult(BaseModel):
    """Score and explanations for one ATS category."""
    score: int = Field(..., ge=0, description="Points awarded")
    max_score: int = Field(..., gt=0, alias="maxScore", description="Points available")
    details: List[str] = Field(default_factory=list, description="Annotated findings (✓ / ⚠ / ℹ)")
    suggestions: List[str] = Field(default_factory=list, description="Actionable improvements")

    class Config:
        populate_by_name = True

    @property
    def percentage(self) -> float:
        return self.score / self.max_score * 100

    @property
    def rating(self) -> str:
        return get_rating(self.percentage)


class ATSCategories(BaseModel):
    """The five fixed ATS categories."""
    keyword_optimization: ATSCategoryResult = Field(..., alias="keywordOptimization")
    formatting: ATSCategoryResult
    structure: ATSCategoryResult
    content_quality: ATSCategoryResult = Field(..., alias="contentQuality")
    contact_info: ATSCategoryResult = Field(..., alias="contactInfo")

    class Config:
        populate_by_name = True

    def items(self) -> Iterator[Tuple[str, ATSCategoryResult]]:
        """Iterate (category id, result) pairs in display order."""
        yield "keywordOptimization", self.keyword_optimization
        yield "formatting", self.formatting
        yield "structure", self.structure
        yield "contentQuality", self.content_quality
        yield "contactInfo", self.contact_info


class ATSReport(BaseModel):
    """Full ATS compatibility report for one resume."""
    overall_score: int = Field(..., ge=0, le=100, alias="overallScore", description="Overall score 0-100")
    rating: str = Field(..., description="Excellent, Good or Needs Improvement")
    categories: ATSCategories

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "overallScore": 82,
                "rating": "Excellent",
                "categories": {
                    "keywordOptimization": {
                        "score": 20,
                        "maxScore": 25,
                        "details": ["✓ Strong skill set with 12 skills listed"],
                        "suggestions": ["Add more keywords from the job description"],
                    },
                },
            }
        }


class ATSAnalyzeRequest(BaseModel):
    """Request model for ATS analysis."""
    resume: Resume = Field(..., description="Structured resume to score")
    job_description: Optional[str] = Field(None, alias="jobDescription", description="Target job description text")
    save: bool = Field(default=False, description="Persist the scan to history")

    class Config:
        populate_by_name = True


class ATSAnalyzeResponse(ATSReport):
    """ATS report plus the stored scan id when the scan was saved."""
    report_id: Optional[int] = Field(None, alias="reportId", description="ID of the saved scan")


class ATSCategoryInfo(BaseModel):
    """Static description of an ATS category."""
    id: str
    name: str
    description: str
    importance: str = Field(..., description="High, Medium or Low")
    tips: List[str] = Field(default_factory=list)


class ATSScanSummary(BaseModel):
    """Schema for a saved scan in list views."""
    id: int = Field(..., description="Scan ID")
    overall_score: int = Field(..., alias="overallScore")
    rating: str
    has_job_description: bool = Field(..., alias="hasJobDescription")
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class ATSScanDetail(ATSScanSummary):
    """Schema for a single saved scan with its full report."""
    job_description: Optional[str] = Field(None, alias="jobDescription")
    resume: Resume
    categories: ATSCategories


class ATSScanListResponse(BaseModel):
    """Schema for paginated scan history."""
    scans: List[ATSScanSummary] = Field(..., description="Saved scans, newest first")
    total: int = Field(..., description="Total number of scans")
    page: int = Field(1, description="Current page number")
    page_size: int = Field(20, alias="pageSize", description="Number of items per page")

    class Config:
        populate_by_name = True
