"""
Shared fixtures: sample resumes, an in-memory database and a test client.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.core.rate_limit import reset_rate_limits
from app.main import app
from app.schemas.resume import Resume, PersonalInfo, WorkExperience, Education, Project


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

FULL_SUMMARY = (
    "Backend engineer who led the migration of a monolith to Python microservices "
    "on AWS cloud, cutting deploy time by 60 percent."
)

STRONG_JOB_DESCRIPTION = (
    "Python engineer for PostgreSQL, Kubernetes, Terraform and Docker experience "
    "building microservices"
)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db):
    """Test client bound to the in-memory database."""
    app.dependency_overrides[get_db] = override_get_db
    reset_rate_limits()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        reset_rate_limits()


@pytest.fixture
def full_resume() -> Resume:
    """A complete resume that earns full marks outside keyword matching."""
    return Resume(
        personal_info=PersonalInfo(
            name="Jane Doe",
            email="jane.doe@example.com",
            phone="+1 555 123 4567",
            location="Austin, TX",
            linkedin="linkedin.com/in/janedoe",
            github="github.com/janedoe",
        ),
        summary=FULL_SUMMARY,
        work_experience=[
            WorkExperience(
                company="Tech Corp",
                position="Senior Software Engineer",
                duration="2021 - Present",
                description="Own the billing platform database and its public REST API, building services in Python.",
                achievements=["Cut p95 latency by 40%", "Mentored 4 engineers"],
            ),
            WorkExperience(
                company="Startup Inc",
                position="Software Engineer",
                duration="2018 - 2021",
                description="Built data pipelines and internal tooling in an agile team.",
                achievements=[],
            ),
        ],
        education=[
            Education(
                institution="State University",
                degree="B.S.",
                field_of_study="Computer Science",
                graduation_date="2018",
            )
        ],
        skills=[
            "Python", "SQL", "API design", "Git", "Docker", "Kubernetes",
            "PostgreSQL", "Redis", "FastAPI", "Linux", "Terraform", "CI/CD",
        ],
        projects=[
            Project(
                name="resume-ats",
                description="ATS scoring service",
                technologies=["FastAPI", "SQLAlchemy"],
            )
        ],
    )


@pytest.fixture
def full_resume_payload(full_resume) -> dict:
    """The full resume as camelCase JSON."""
    return full_resume.model_dump(mode="json", by_alias=True, exclude_none=True)
