"""
Pydantic schemas for resume generation endpoints.
"""
from typing import Optional, List
from pydantic import BaseModel, Field

from app.schemas.ats import ATSReport
from app.schemas.resume import Resume


class ResumeGenerationRequest(BaseModel):
    """Request model for AI resume generation."""
    job_description: Optional[str] = Field(None, alias="jobDescription", description="Target job description")
    resume_text: Optional[str] = Field(None, alias="resumeText", description="Existing resume as plain text")
    user_experience: Optional[str] = Field(None, alias="userExperience", description="Free-form experience notes")
    skills: Optional[List[str]] = Field(None, description="Skills to include")
    education: Optional[str] = Field(None, description="Free-form education notes")
    target_role: Optional[str] = Field(None, alias="targetRole", description="Role to optimize for")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "jobDescription": "We are hiring a Senior Backend Engineer to design and operate Python services...",
                "userExperience": "6 years building REST APIs at Tech Corp",
                "skills": ["Python", "PostgreSQL", "Docker"],
                "targetRole": "Senior Backend Engineer",
            }
        }


class ResumeGenerationResponse(BaseModel):
    """Generated resume plus its ATS report."""
    resume: Resume
    ats_report: ATSReport = Field(..., alias="atsReport")

    class Config:
        populate_by_name = True
