"""
Pydantic schemas for structured resumes.

Field aliases follow the camelCase JSON emitted by the resume generator.
Every field has an empty default so partially filled resumes still validate,
and explicit nulls are read as that empty default.
"""
from typing import Optional, List
from pydantic import BaseModel, Field, ValidationInfo, field_validator


class ResumeModel(BaseModel):
    """Base for resume sections; an explicit null falls back to the field default."""

    @field_validator("*", mode="before")
    @classmethod
    def none_to_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class PersonalInfo(ResumeModel):
    """Contact block at the top of a resume."""
    name: str = Field(default="", description="Full name")
    email: str = Field(default="", description="Email address")
    phone: str = Field(default="", description="Phone number as written")
    location: str = Field(default="", description="City, state or region")
    linkedin: Optional[str] = Field(None, description="LinkedIn profile URL")
    github: Optional[str] = Field(None, description="GitHub profile URL")


class WorkExperience(ResumeModel):
    company: str = Field(default="", description="Employer name")
    position: str = Field(default="", description="Job title")
    duration: str = Field(default="", description="Date range, e.g. 'Jan 2020 - Present'")
    description: str = Field(default="", description="Role summary")
    achievements: List[str] = Field(default_factory=list, description="Achievement bullets")


class Education(ResumeModel):
    institution: str = Field(default="")
    degree: str = Field(default="")
    field_of_study: str = Field(default="", alias="fieldOfStudy")
    graduation_date: str = Field(default="", alias="graduationDate")

    class Config:
        populate_by_name = True


class Project(ResumeModel):
    name: str = Field(default="")
    description: str = Field(default="")
    technologies: List[str] = Field(default_factory=list)


class Resume(ResumeModel):
    """Structured resume as produced by the generator or edited by the user."""
    personal_info: Optional[PersonalInfo] = Field(None, alias="personalInfo", description="Contact information")
    summary: str = Field(default="", description="Professional summary")
    work_experience: List[WorkExperience] = Field(default_factory=list, alias="workExperience", description="Most recent first")
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list, description="Skill names, duplicates kept as given")
    projects: Optional[List[Project]] = Field(None, description="Optional project list")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "personalInfo": {
                    "name": "Jane Doe",
                    "email": "jane.doe@email.com",
                    "phone": "+1 (555) 123-4567",
                    "location": "Austin, TX",
                    "linkedin": "linkedin.com/in/janedoe",
                    "github": "github.com/janedoe",
                },
                "summary": "Backend engineer with 6 years of experience building Python APIs...",
                "workExperience": [
                    {
                        "company": "Tech Corp",
                        "position": "Senior Software Engineer",
                        "duration": "2021 - Present",
                        "description": "Own the billing platform and its public REST API.",
                        "achievements": ["Cut p95 latency by 40%"],
                    }
                ],
                "education": [
                    {
                        "institution": "State University",
                        "degree": "B.S.",
                        "fieldOfStudy": "Computer Science",
                        "graduationDate": "2018",
                    }
                ],
                "skills": ["Python", "SQL", "Docker"],
                "projects": [
                    {
                        "name": "resume-ats",
                        "description": "ATS scoring service",
                        "technologies": ["FastAPI", "SQLAlchemy"],
                    }
                ],
            }
        }
