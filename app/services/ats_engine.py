"""
ATS Scoring Engine.

Scores a structured resume across five weighted categories and explains
every point awarded or withheld. Optionally matches the resume against a
job description using heuristic keyword extraction.

The engine is pure: no I/O, no shared state, same inputs give the same report.
"""
import logging
import math
import re
from typing import List, Optional

from app.core import ats_rules as rules
from app.schemas.ats import ATSCategories, ATSCategoryResult, ATSReport
from app.schemas.resume import Resume

logger = logging.getLogger(__name__)

_KEYWORD_PATTERN = re.compile(r"\b[a-z]{%d,}\b" % rules.MIN_KEYWORD_LENGTH, re.ASCII)
_DIGIT_PATTERN = re.compile(r"\d+")


def analyze_resume(resume: Resume, job_description: Optional[str] = None) -> ATSReport:
    """
    Score a resume for ATS compatibility.

    Args:
        resume: Structured resume (never modified)
        job_description: Optional job posting text for keyword matching

    Returns:
        ATSReport with overall score, rating and five category results
    """
    if job_description is not None and not job_description.strip():
        job_description = None

    resume_text = serialize_resume(resume)

    categories = ATSCategories(
        keyword_optimization=score_keywords(resume, resume_text, job_description),
        formatting=score_formatting(resume),
        structure=score_structure(resume),
        content_quality=score_content_quality(resume, resume_text),
        contact_info=score_contact_info(resume),
    )

    total_score = sum(category.score for _, category in categories.items())
    total_max = sum(category.max_score for _, category in categories.items())
    overall_score = _round_half_up(total_score / total_max * 100) if total_max else 0

    logger.debug(
        f"ATS analysis complete: overall={overall_score}, "
        f"job_description={'yes' if job_description else 'no'}"
    )

    return ATSReport(
        overall_score=overall_score,
        rating=rules.get_rating(overall_score),
        categories=categories,
    )


def serialize_resume(resume: Resume) -> str:
    """Render the resume as the compact camelCase JSON the generator emits."""
    return resume.model_dump_json(by_alias=True, exclude_none=True)


def extract_keywords(text: str) -> List[str]:
    """
    Extract candidate keywords from free text.

    Lower-cases the text, takes runs of 4+ ASCII letters, drops stop words,
    deduplicates and keeps the 30 longest (ties in order of appearance).
    """
    words = _KEYWORD_PATTERN.findall(text.lower())
    unique = dict.fromkeys(word for word in words if word not in rules.STOP_WORDS)
    ranked = sorted(unique, key=len, reverse=True)
    return ranked[:rules.MAX_JOB_KEYWORDS]


def score_keywords(resume: Resume, resume_text: str, job_description: Optional[str] = None) -> ATSCategoryResult:
    """Keyword optimization: skill count, common tech terms, job description match."""
    details: List[str] = []
    suggestions: List[str] = []
    score = 0
    max_score = rules.get_max_score("keywordOptimization")

    text_lower = resume_text.lower()

    skill_count = len(resume.skills)
    if skill_count >= rules.STRONG_SKILL_COUNT:
        score += 10
        details.append(f"✓ Strong skill set with {skill_count} skills listed")
    elif skill_count >= rules.GOOD_SKILL_COUNT:
        score += 6
        details.append(f"✓ Good skill set with {skill_count} skills listed")
        suggestions.append("Consider adding more relevant technical skills")
    else:
        score += 3
        details.append(f"⚠ Limited skills listed ({skill_count})")
        suggestions.append("Add more relevant skills to improve keyword matching")

    found = [kw for kw in rules.COMMON_TECH_KEYWORDS if kw in text_lower]
    if len(found) >= rules.STRONG_COMMON_KEYWORDS:
        score += 8
        details.append(f"✓ Contains {len(found)} common technical keywords")
    elif len(found) >= rules.GOOD_COMMON_KEYWORDS:
        score += 5
        details.append(f"✓ Contains {len(found)} common technical keywords")
        suggestions.append("Include more industry-standard technical terms")
    else:
        score += 2
        suggestions.append("Add more technical keywords relevant to your field")

    if job_description:
        job_keywords = extract_keywords(job_description)
        matched = [kw for kw in job_keywords if kw in text_lower]
        match_ratio = len(matched) / max(len(job_keywords), 1)
        match_percent = _round_half_up(match_ratio * 100)

        if match_ratio >= rules.STRONG_MATCH_RATIO:
            score += 7
            details.append(f"✓ Strong keyword match ({match_percent}% of job keywords found)")
        elif match_ratio >= rules.MODERATE_MATCH_RATIO:
            score += 4
            details.append(f"⚠ Moderate keyword match ({match_percent}% of job keywords found)")
            suggestions.append("Add more keywords from the job description")
        else:
            score += 1
            details.append(f"⚠ Low keyword match ({match_percent}% of job keywords found)")
            suggestions.append("Significantly improve keyword matching with job description")
    else:
        score += rules.NEUTRAL_JOB_MATCH_POINTS
        details.append("ℹ No job description provided for keyword matching")

    return ATSCategoryResult(
        score=min(score, max_score),
        max_score=max_score,
        details=details,
        suggestions=suggestions,
    )


def score_formatting(resume: Resume) -> ATSCategoryResult:
    """Formatting: start from full marks, deduct for each missing section."""
    details: List[str] = []
    suggestions: List[str] = []
    max_score = rules.get_max_score("formatting")
    score = max_score

    if resume.personal_info is not None:
        details.append("✓ Personal information properly structured")
    else:
        score -= 5
        suggestions.append("Ensure personal information is complete")

    if len(resume.summary) > rules.FORMATTING_SUMMARY_MIN_LENGTH:
        details.append("✓ Professional summary present")
    else:
        score -= 3
        suggestions.append("Add a professional summary (2-3 sentences)")

    if resume.work_experience:
        details.append(f"✓ Work experience section with {len(resume.work_experience)} entries")
    else:
        score -= 5
        suggestions.append("Add work experience section")

    if resume.education:
        details.append(f"✓ Education section with {len(resume.education)} entries")
    else:
        score -= 3
        suggestions.append("Add education section")

    if resume.skills:
        details.append(f"✓ Skills section with {len(resume.skills)} skills")
    else:
        score -= 4
        suggestions.append("Add skills section")

    return ATSCategoryResult(
        score=max(score, 0),
        max_score=max_score,
        details=details,
        suggestions=suggestions,
    )


def score_structure(resume: Resume) -> ATSCategoryResult:
    """Structure: weighted section presence plus a bonus for dated experience."""
    details: List[str] = []
    suggestions: List[str] = []
    score = 0
    max_score = rules.get_max_score("structure")

    present = {
        "Personal Info": resume.personal_info is not None,
        "Summary": bool(resume.summary),
        "Work Experience": bool(resume.work_experience),
        "Education": bool(resume.education),
        "Skills": bool(resume.skills),
        "Projects": bool(resume.projects),
    }

    for name, weight in rules.STRUCTURE_SECTION_WEIGHTS:
        if present[name]:
            score += weight
            details.append(f"✓ {name} section present")
        else:
            suggestions.append(f"Add {name} section")

    if resume.work_experience:
        if all(exp.duration for exp in resume.work_experience):
            score += rules.EXPERIENCE_DATES_BONUS
            details.append("✓ All work experiences include dates")
        else:
            suggestions.append("Ensure all work experiences include dates")

    return ATSCategoryResult(
        score=min(score, max_score),
        max_score=max_score,
        details=details,
        suggestions=suggestions,
    )


def score_content_quality(resume: Resume, resume_text: str) -> ATSCategoryResult:
    """Content quality: summary, experience depth and quantifiable metrics."""
    details: List[str] = []
    suggestions: List[str] = []
    score = 0
    max_score = rules.get_max_score("contentQuality")

    if resume.summary:
        if rules.SUMMARY_MIN_LENGTH <= len(resume.summary) <= rules.SUMMARY_MAX_LENGTH:
            score += 5
            details.append("✓ Professional summary has appropriate length")
        else:
            score += 2
            suggestions.append(
                f"Optimize summary length ({rules.SUMMARY_MIN_LENGTH}-{rules.SUMMARY_MAX_LENGTH} characters recommended)"
            )

        summary_lower = resume.summary.lower()
        if any(verb in summary_lower for verb in rules.ACTION_VERBS):
            score += 2
            details.append("✓ Summary uses action verbs")
        else:
            suggestions.append("Use action verbs in summary (led, developed, implemented)")

    if resume.work_experience:
        if any(exp.achievements for exp in resume.work_experience):
            score += 5
            details.append("✓ Work experience includes achievements")
        else:
            score += 2
            suggestions.append("Add quantifiable achievements to work experience")

        if all(len(exp.description) > rules.DESCRIPTION_MIN_LENGTH for exp in resume.work_experience):
            score += 3
            details.append("✓ Work experiences have detailed descriptions")
        else:
            suggestions.append("Add more detailed descriptions to work experiences")

    if _DIGIT_PATTERN.search(resume_text):
        score += 5
        details.append("✓ Resume includes quantifiable metrics")
    else:
        suggestions.append("Add numbers and percentages to quantify achievements")

    return ATSCategoryResult(
        score=min(score, max_score),
        max_score=max_score,
        details=details,
        suggestions=suggestions,
    )


def score_contact_info(resume: Resume) -> ATSCategoryResult:
    """Contact info: independent points per contact field."""
    details: List[str] = []
    suggestions: List[str] = []
    score = 0
    max_score = rules.get_max_score("contactInfo")

    info = resume.personal_info
    if info is None:
        suggestions.append("Add complete contact information")
        return ATSCategoryResult(score=0, max_score=max_score, details=details, suggestions=suggestions)

    if info.name.strip():
        score += 3
        details.append("✓ Name provided")
    else:
        suggestions.append("Add your full name")

    if "@" in info.email:
        score += 3
        details.append("✓ Valid email address provided")
    else:
        suggestions.append("Add a valid email address")

    if len(info.phone) >= rules.MIN_PHONE_LENGTH:
        score += 3
        details.append("✓ Phone number provided")
    else:
        suggestions.append("Add phone number")

    if info.location.strip():
        score += 2
        details.append("✓ Location provided")
    else:
        suggestions.append("Add location (city, state)")

    if info.linkedin:
        score += 2
        details.append("✓ LinkedIn profile included")
    else:
        suggestions.append("Add LinkedIn profile URL")

    # GitHub is a bonus, no suggestion when missing
    if info.github:
        score += 2
        details.append("✓ GitHub profile included")

    return ATSCategoryResult(
        score=min(score, max_score),
        max_score=max_score,
        details=details,
        suggestions=suggestions,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
