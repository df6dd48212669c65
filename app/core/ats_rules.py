"""
ATS scoring rules.

Single source of truth for category max scores, keyword vocabularies,
stop words and the category catalogue shown to users.
"""
from typing import Dict, FrozenSet, Tuple

# Category max scores (sum to 100)
CATEGORY_MAX_SCORES: Dict[str, int] = {
    "keywordOptimization": 25,
    "formatting": 20,
    "structure": 20,
    "contentQuality": 20,
    "contactInfo": 15,
}

# Technical terms most ATS filters look for regardless of role
COMMON_TECH_KEYWORDS: Tuple[str, ...] = (
    "python", "javascript", "sql", "api", "database", "cloud", "agile", "git",
)

ACTION_VERBS: Tuple[str, ...] = (
    "led", "developed", "implemented", "managed", "created", "designed", "improved", "achieved",
)

# Shorter than the minimum keyword length, so these never filter an extracted token
STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "her", "was", "one",
    "our", "out", "day", "get", "has", "him", "his", "how", "its", "may", "new", "now",
    "old", "see", "two", "way", "who", "boy", "did", "let", "put", "say", "she", "too",
    "use",
})

MAX_JOB_KEYWORDS = 30
MIN_KEYWORD_LENGTH = 4

# Keyword optimization thresholds
STRONG_SKILL_COUNT = 10
GOOD_SKILL_COUNT = 5
STRONG_COMMON_KEYWORDS = 5
GOOD_COMMON_KEYWORDS = 3
STRONG_MATCH_RATIO = 0.6
MODERATE_MATCH_RATIO = 0.4
NEUTRAL_JOB_MATCH_POINTS = 5

# Content quality thresholds
SUMMARY_MIN_LENGTH = 100
SUMMARY_MAX_LENGTH = 300
FORMATTING_SUMMARY_MIN_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 20
MIN_PHONE_LENGTH = 10

# (display name, weight) per structural section
STRUCTURE_SECTION_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("Personal Info", 3),
    ("Summary", 3),
    ("Work Experience", 5),
    ("Education", 3),
    ("Skills", 3),
    ("Projects", 3),
)
EXPERIENCE_DATES_BONUS = 2

# Rating bands (percent)
EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60

ATS_CATEGORIES: Tuple[Dict[str, object], ...] = (
    {
        "id": "keywordOptimization",
        "name": "Keyword Optimization",
        "description": "Matches between your resume and job description keywords. ATS systems scan for specific terms related to skills, technologies, and qualifications.",
        "importance": "High",
        "tips": [
            "Include exact keywords from the job description",
            "Use industry-standard terminology",
            'Include both acronyms and full forms (e.g., "API" and "Application Programming Interface")',
            "Match the language used in the job posting",
        ],
    },
    {
        "id": "formatting",
        "name": "Formatting & Parsing",
        "description": "How well the ATS can parse and extract information from your resume. Complex formatting, tables, images, or unusual fonts can cause parsing errors.",
        "importance": "High",
        "tips": [
            "Use simple, clean formatting",
            "Avoid tables, images, and graphics",
            "Use standard fonts (Arial, Calibri, Times New Roman)",
            "Save as PDF or Word document",
            "Avoid headers and footers",
        ],
    },
    {
        "id": "structure",
        "name": "Structure & Organization",
        "description": "Logical organization of sections and information. ATS systems expect standard resume sections in a predictable order.",
        "importance": "High",
        "tips": [
            "Use clear section headings (Experience, Education, Skills)",
            "Maintain consistent formatting throughout",
            "Use reverse chronological order for experience",
            "Include dates in a consistent format",
            "Keep sections well-organized and easy to scan",
        ],
    },
    {
        "id": "contentQuality",
        "name": "Content Quality",
        "description": "Relevance and quality of content. Includes proper use of action verbs, quantifiable achievements, and relevant experience.",
        "importance": "Medium",
        "tips": [
            "Use action verbs (led, developed, implemented)",
            "Quantify achievements with numbers and percentages",
            "Keep descriptions concise and impactful",
            "Focus on relevant experience",
            "Highlight transferable skills",
        ],
    },
    {
        "id": "contactInfo",
        "name": "Contact Information",
        "description": "Completeness and accuracy of contact details. Missing or incorrect information can prevent employers from reaching you.",
        "importance": "Medium",
        "tips": [
            "Include full name, email, and phone number",
            "Add LinkedIn profile URL",
            "Include location (city, state)",
            "Ensure all contact information is current",
            "Use a professional email address",
        ],
    },
)


def get_max_score(category: str) -> int:
    """Get the max score for a category id."""
    return CATEGORY_MAX_SCORES[category]


def get_rating(percentage: float) -> str:
    """
    Map a 0-100 percentage to a rating label.

    Args:
        percentage: Score as a percentage of the max

    Returns:
        "Excellent", "Good" or "Needs Improvement"
    """
    if percentage >= EXCELLENT_THRESHOLD:
        return "Excellent"
    if percentage >= GOOD_THRESHOLD:
        return "Good"
    return "Needs Improvement"
