"""
Resume Generator Service.

Turns a job description, or an existing unstructured resume, into a
structured Resume using an LLM provider.
"""
import logging
import json
import re
from typing import Optional, Dict, List

from pydantic import ValidationError

from app.core.config import OPENAI_MODEL
from app.llm.provider import LLMProvider
from app.schemas.generation import ResumeGenerationRequest
from app.schemas.resume import Resume

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a professional resume writer and career coach who writes ATS-optimized resumes."

RESUME_JSON_TEMPLATE = """{
  "personalInfo": {
    "name": "John Doe",
    "email": "john.doe@email.com",
    "phone": "+1 (555) 123-4567",
    "location": "City, State",
    "linkedin": "linkedin.com/in/johndoe",
    "github": "github.com/johndoe"
  },
  "summary": "Professional summary highlighting relevant experience and skills (2-3 sentences)",
  "workExperience": [
    {
      "company": "Company Name",
      "position": "Job Title",
      "duration": "Start Date - End Date",
      "description": "Brief description of role and responsibilities",
      "achievements": ["Achievement 1", "Achievement 2", "Achievement 3"]
    }
  ],
  "education": [
    {
      "institution": "University Name",
      "degree": "Degree Type",
      "fieldOfStudy": "Field of Study",
      "graduationDate": "Year"
    }
  ],
  "skills": ["Skill 1", "Skill 2", "Skill 3"],
  "projects": [
    {
      "name": "Project Name",
      "description": "Project description",
      "technologies": ["Tech 1", "Tech 2"]
    }
  ]
}"""

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)


class ResumeGenerationError(Exception):
    """Raised when a resume cannot be generated from the given input or LLM output."""


class GeneratorUnavailableError(ResumeGenerationError):
    """Raised when no LLM provider is configured."""


def default_provider() -> LLMProvider:
    from app.llm.openai_provider import OpenAIProvider

    try:
        return OpenAIProvider()
    except ValueError as e:
        raise GeneratorUnavailableError(str(e)) from e


def build_prompt(request: ResumeGenerationRequest) -> str:
    """
    Build the user prompt for a generation request.

    Uses resume-text mode when resume text is supplied, otherwise
    job-description mode.

    Raises:
        ResumeGenerationError: if neither input is provided
    """
    has_resume_text = bool(request.resume_text and request.resume_text.strip())
    has_job_description = bool(request.job_description and request.job_description.strip())

    if has_resume_text:
        context: List[str] = []
        if request.user_experience:
            context.append(f"User Experience: {request.user_experience}")
        if request.skills:
            context.append(f"Skills: {', '.join(request.skills)}")
        if request.education:
            context.append(f"Education: {request.education}")
        if request.target_role:
            context.append(f"Target Role: {request.target_role}")
        if has_job_description:
            context.append(f"Job Description (for optimization): {request.job_description}")

        prompt = f"""The user has provided their existing resume text in unstructured format.
Parse and extract ALL information from it: personal information, work experience,
education, skills and projects. Write a professional summary based on what you extracted.
Preserve all original information and do not invent details. If information is missing,
use empty strings.

Resume Text Provided:
{request.resume_text}

Additional Context:
{chr(10).join(context) if context else 'None'}
"""
    elif has_job_description:
        prompt = f"""Based on the provided job description and user information, create a compelling,
ATS-optimized resume.

Job Description:
{request.job_description}

User Experience (if provided):
{request.user_experience or 'Not provided'}

User Skills (if provided):
{', '.join(request.skills) if request.skills else 'Not provided'}

User Education (if provided):
{request.education or 'Not provided'}

Target Role (if specified):
{request.target_role or 'Infer from job description'}
"""
    else:
        raise ResumeGenerationError("Either job description or resume text must be provided")

    return prompt + f"""
Return ONLY valid JSON in the following format, no markdown or extra text:

{RESUME_JSON_TEMPLATE}
"""


def parse_resume_json(text: str) -> Resume:
    """
    Parse LLM output into a Resume.

    Strips markdown code fences before decoding.

    Raises:
        ResumeGenerationError: if the output is not a valid resume object
    """
    cleaned = _FENCE_PATTERN.sub("", text.strip()).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResumeGenerationError(f"Model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResumeGenerationError("Model returned JSON that is not an object")

    try:
        return Resume.model_validate(data)
    except ValidationError as e:
        raise ResumeGenerationError(f"Model returned an invalid resume: {e.error_count()} errors") from e


def generate_resume(
    request: ResumeGenerationRequest,
    provider: Optional[LLMProvider] = None,
    model: str = OPENAI_MODEL,
) -> Resume:
    """
    Generate a structured resume.

    Args:
        request: Generation inputs
        provider: LLM provider (OpenAI by default)
        model: Model identifier

    Returns:
        Validated Resume

    Raises:
        GeneratorUnavailableError: no provider configured
        ResumeGenerationError: bad input, provider failure or unusable output
    """
    prompt = build_prompt(request)
    provider = provider or default_provider()

    messages: List[Dict[str, str]] = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]

    try:
        response = provider.chat(
            messages=messages,
            model=model,
            temperature=0.7,
            max_tokens=3000,
            response_format={"type": "json_object"},
        )
    except Exception as e:
        logger.error(f"Resume generation call failed: {type(e).__name__}: {e}", exc_info=True)
        raise ResumeGenerationError("AI service error") from e

    resume = parse_resume_json(response.content)

    logger.info(
        f"Resume generated: model={response.model or model}, tokens={response.tokens_in + response.tokens_out}, "
        f"experience_entries={len(resume.work_experience)}, skills={len(resume.skills)}"
    )
    return resume
