"""
Unit tests for the ATS scoring engine.
Tests category scoring, aggregation and edge cases.
"""
import pytest

from app.core.ats_rules import CATEGORY_MAX_SCORES
from app.schemas.resume import Resume, PersonalInfo, WorkExperience, Education
from app.services.ats_engine import (
    analyze_resume,
    score_contact_info,
    score_content_quality,
    score_formatting,
    score_keywords,
    score_structure,
    serialize_resume,
)

from tests.conftest import STRONG_JOB_DESCRIPTION


def _category_scores(report):
    return {key: category.score for key, category in report.categories.items()}


def test_full_resume_without_job_description(full_resume):
    """Test a complete resume scores full marks except the neutral job match."""
    report = analyze_resume(full_resume)

    assert _category_scores(report) == {
        "keywordOptimization": 23,
        "formatting": 20,
        "structure": 20,
        "contentQuality": 20,
        "contactInfo": 15,
    }
    assert report.overall_score == 98
    assert report.rating == "Excellent"


def test_full_resume_with_matching_job_description(full_resume):
    """Test 12 skills, common keywords and a strong job match give the keyword max."""
    report = analyze_resume(full_resume, STRONG_JOB_DESCRIPTION)

    keywords = report.categories.keyword_optimization
    assert keywords.score == 25
    assert keywords.max_score == 25
    assert "✓ Strong skill set with 12 skills listed" in keywords.details
    assert "✓ Strong keyword match (100% of job keywords found)" in keywords.details
    assert keywords.suggestions == []
    assert report.overall_score == 100


def test_max_scores_are_fixed(full_resume):
    """Test every category reports its fixed max score and they sum to 100."""
    report = analyze_resume(full_resume)

    for key, category in report.categories.items():
        assert category.max_score == CATEGORY_MAX_SCORES[key]
    assert sum(category.max_score for _, category in report.categories.items()) == 100


def test_overall_score_is_rounded_percentage(full_resume):
    """Test overall score equals the rounded share of points earned."""
    for resume in (full_resume, Resume(), Resume(skills=["Python"] * 6, summary="x" * 60)):
        report = analyze_resume(resume)
        total = sum(category.score for _, category in report.categories.items())
        assert report.overall_score == round(100 * total / 100)
        assert 0 <= report.overall_score <= 100
        for _, category in report.categories.items():
            assert 0 <= category.score <= category.max_score


def test_analysis_is_idempotent(full_resume):
    """Test the same input always produces the same report."""
    first = analyze_resume(full_resume, STRONG_JOB_DESCRIPTION)
    second = analyze_resume(full_resume, STRONG_JOB_DESCRIPTION)

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_resume_is_not_mutated(full_resume):
    """Test the engine never modifies its input."""
    before = full_resume.model_copy(deep=True)
    analyze_resume(full_resume, STRONG_JOB_DESCRIPTION)

    assert full_resume == before


def test_empty_resume():
    """Test an empty resume only earns the keyword floor and neutral job score."""
    report = analyze_resume(Resume())

    assert _category_scores(report) == {
        "keywordOptimization": 10,
        "formatting": 0,
        "structure": 0,
        "contentQuality": 0,
        "contactInfo": 0,
    }
    assert report.overall_score == 10
    assert report.rating == "Needs Improvement"


# ============================================
# Keyword optimization
# ============================================

def test_missing_job_description_is_neutral(full_resume):
    """Test no job description awards 5 neutral points with an informational detail."""
    resume_text = serialize_resume(full_resume)
    result = score_keywords(full_resume, resume_text, None)

    assert "ℹ No job description provided for keyword matching" in result.details
    assert not any("job description" in suggestion for suggestion in result.suggestions)
    assert result.score == 10 + 8 + 5


def test_blank_job_description_treated_as_missing(full_resume):
    """Test a whitespace-only job description counts as absent."""
    report = analyze_resume(full_resume, "   \n ")

    assert report.categories.keyword_optimization.score == 23
    assert "ℹ No job description provided for keyword matching" in report.categories.keyword_optimization.details


def test_moderate_job_match(full_resume):
    """Test 40% of job keywords found gives 4 points and a suggestion."""
    # keywords: python, docker, marine, coral, reef -> 2 of 5 found
    report = analyze_resume(full_resume, "python docker marine coral reef")
    keywords = report.categories.keyword_optimization

    assert keywords.score == 10 + 8 + 4
    assert "⚠ Moderate keyword match (40% of job keywords found)" in keywords.details
    assert "Add more keywords from the job description" in keywords.suggestions


def test_function_words_count_toward_job_match():
    """Test common words like 'with' are job keywords and can be matched."""
    # keywords: python, django, with -> python and with found
    resume = Resume(summary="Backend developer who works with product teams", skills=["Python"])

    report = analyze_resume(resume, "Python with Django")

    assert "✓ Strong keyword match (67% of job keywords found)" in report.categories.keyword_optimization.details


def test_low_job_match(full_resume):
    """Test an unrelated job description gives 1 point and a suggestion."""
    report = analyze_resume(full_resume, "Looking for a marine biologist specializing in coral reef ecosystems")
    keywords = report.categories.keyword_optimization

    assert keywords.score == 10 + 8 + 1
    assert "⚠ Low keyword match (0% of job keywords found)" in keywords.details
    assert "Significantly improve keyword matching with job description" in keywords.suggestions


def test_job_description_without_keywords(full_resume):
    """Test a job description with no extractable keywords does not divide by zero."""
    report = analyze_resume(full_resume, "a to of an 42")

    assert "⚠ Low keyword match (0% of job keywords found)" in report.categories.keyword_optimization.details


@pytest.mark.parametrize("skill_count, expected_points", [
    (0, 3),
    (4, 3),
    (5, 6),
    (9, 6),
    (10, 10),
    (15, 10),
])
def test_skill_count_bands(skill_count, expected_points):
    """Test skill count sub-score thresholds."""
    resume = Resume(skills=[f"Skill{chr(97 + i)}" for i in range(skill_count)])
    result = score_keywords(resume, serialize_resume(resume), None)

    # No common keywords (2) and no job description (5)
    assert result.score == expected_points + 2 + 5


def test_duplicate_skills_are_counted():
    """Test duplicate skills are not deduplicated."""
    resume = Resume(skills=["Python"] * 10)
    result = score_keywords(resume, serialize_resume(resume), None)

    assert "✓ Strong skill set with 10 skills listed" in result.details


def test_common_keyword_bands():
    """Test 3 common technical keywords earn 5 points with a suggestion."""
    resume = Resume(skills=["Python", "SQL", "Git"])
    result = score_keywords(resume, serialize_resume(resume), None)

    assert "✓ Contains 3 common technical keywords" in result.details
    assert "Include more industry-standard technical terms" in result.suggestions
    assert result.score == 3 + 5 + 5


# ============================================
# Formatting
# ============================================

def test_formatting_floor_for_empty_resume():
    """Test formatting never goes below zero and lists every missing section."""
    result = score_formatting(Resume())

    assert result.score == 0
    assert result.details == []
    assert result.suggestions == [
        "Ensure personal information is complete",
        "Add a professional summary (2-3 sentences)",
        "Add work experience section",
        "Add education section",
        "Add skills section",
    ]


def test_formatting_summary_must_exceed_fifty_chars():
    """Test a 50 character summary is still too short."""
    short = score_formatting(Resume(summary="a" * 50))
    long_enough = score_formatting(Resume(summary="a" * 51))

    assert long_enough.score - short.score == 3
    assert "✓ Professional summary present" in long_enough.details


def test_formatting_full_resume(full_resume):
    """Test a complete resume keeps all formatting points."""
    result = score_formatting(full_resume)

    assert result.score == 20
    assert "✓ Work experience section with 2 entries" in result.details
    assert "✓ Skills section with 12 skills" in result.details
    assert result.suggestions == []


# ============================================
# Structure
# ============================================

def test_structure_capped_at_max(full_resume):
    """Test all sections plus the dates bonus are capped at 20."""
    result = score_structure(full_resume)

    assert result.score == 20
    assert "✓ All work experiences include dates" in result.details
    assert "✓ Projects section present" in result.details


def test_structure_bonus_requires_every_duration():
    """Test one experience without dates removes the bonus."""
    resume = Resume(work_experience=[
        WorkExperience(company="Acme", duration="2020 - 2022"),
        WorkExperience(company="Globex", duration=""),
    ])
    result = score_structure(resume)

    assert result.score == 5
    assert "✓ All work experiences include dates" not in result.details
    assert "Ensure all work experiences include dates" in result.suggestions


def test_structure_missing_sections():
    """Test absent sections add suggestions but no points."""
    resume = Resume(skills=["Python"], education=[Education(institution="MIT")])
    result = score_structure(resume)

    assert result.score == 6
    assert "Add Personal Info section" in result.suggestions
    assert "Add Projects section" in result.suggestions
    assert "Ensure all work experiences include dates" not in result.suggestions


def test_structure_empty_projects_list_is_absent():
    """Test an empty projects list does not count as a section."""
    result = score_structure(Resume(projects=[]))

    assert "Add Projects section" in result.suggestions


# ============================================
# Content quality
# ============================================

def test_content_quality_weak_experience():
    """Test no achievements and a short description earn 2 and 0 points."""
    resume = Resume(work_experience=[
        WorkExperience(
            company="Acme",
            position="Developer",
            duration="Jan - Dec",
            description="Wrote some code",
            achievements=[],
        )
    ])
    result = score_content_quality(resume, serialize_resume(resume))

    # 2 for missing achievements, 0 for descriptions, no digits anywhere
    assert result.score == 2
    assert "Add quantifiable achievements to work experience" in result.suggestions
    assert "Add more detailed descriptions to work experiences" in result.suggestions
    assert "Add numbers and percentages to quantify achievements" in result.suggestions


@pytest.mark.parametrize("length, expected", [
    (99, 2),
    (100, 5),
    (300, 5),
    (301, 2),
])
def test_summary_length_band(length, expected):
    """Test summary length band boundaries."""
    resume = Resume(summary="x" * length)
    result = score_content_quality(resume, serialize_resume(resume))

    assert result.score == expected


def test_summary_action_verbs_case_insensitive():
    """Test action verbs are matched case-insensitively as substrings."""
    resume = Resume(summary="DEVELOPED payment systems")
    result = score_content_quality(resume, serialize_resume(resume))

    assert "✓ Summary uses action verbs" in result.details
    assert result.score == 2 + 2


def test_content_quality_without_summary_has_no_summary_feedback():
    """Test a missing summary contributes nothing and adds no summary suggestions."""
    result = score_content_quality(Resume(), serialize_resume(Resume()))

    assert result.score == 0
    assert result.details == []
    assert result.suggestions == ["Add numbers and percentages to quantify achievements"]


def test_quantifiable_metrics_from_any_field():
    """Test a digit anywhere in the resume counts as a metric."""
    resume = Resume(education=[Education(graduation_date="2019")])
    result = score_content_quality(resume, serialize_resume(resume))

    assert "✓ Resume includes quantifiable metrics" in result.details
    assert result.score == 5


def test_content_quality_capped(full_resume):
    """Test a strong resume reaches exactly the content max."""
    result = score_content_quality(full_resume, serialize_resume(full_resume))

    assert result.score == 20
    assert result.suggestions == []


# ============================================
# Contact info
# ============================================

def test_contact_info_missing_personal_info():
    """Test a resume without personal info gets a single suggestion."""
    report = analyze_resume(Resume(skills=["Python"]))
    contact = report.categories.contact_info

    assert contact.score == 0
    assert contact.details == []
    assert contact.suggestions == ["Add complete contact information"]


def test_contact_info_complete(full_resume):
    """Test all contact fields earn the max."""
    result = score_contact_info(full_resume)

    assert result.score == 15
    assert "✓ GitHub profile included" in result.details
    assert result.suggestions == []


def test_contact_info_partial():
    """Test invalid or missing fields add targeted suggestions."""
    resume = Resume(personal_info=PersonalInfo(
        name="   ",
        email="jane.example.com",
        phone="555-1234",
        location="Remote",
    ))
    result = score_contact_info(resume)

    assert result.score == 2
    assert result.details == ["✓ Location provided"]
    assert result.suggestions == [
        "Add your full name",
        "Add a valid email address",
        "Add phone number",
        "Add LinkedIn profile URL",
    ]


def test_phone_length_counts_characters():
    """Test the phone check counts raw characters, not digits."""
    resume = Resume(personal_info=PersonalInfo(phone="(555) 12-3"))
    result = score_contact_info(resume)

    assert "✓ Phone number provided" in result.details


def test_github_is_optional_bonus():
    """Test a missing GitHub profile adds no suggestion."""
    resume = Resume(personal_info=PersonalInfo(
        name="Jane Doe",
        email="jane@example.com",
        phone="+1 555 123 4567",
        location="Austin, TX",
        linkedin="linkedin.com/in/janedoe",
    ))
    result = score_contact_info(resume)

    assert result.score == 13
    assert not any("GitHub" in suggestion for suggestion in result.suggestions)


# ============================================
# Serialization
# ============================================

def test_serialize_resume_uses_camel_case_and_skips_unset(full_resume):
    """Test serialization matches the generator's JSON shape."""
    text = serialize_resume(Resume(summary="Hi"))

    assert '"workExperience":[]' in text
    assert "personalInfo" not in text
    assert "projects" not in text
    assert "fieldOfStudy" in serialize_resume(full_resume)
