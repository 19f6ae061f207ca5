import os

# Console-only logging, no log files written during tests
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest

from app.models.schemas import CandidateProfile


@pytest.fixture
def cv_text():
    return (
        "Jane Doe jane@x.com 555-123-4567 skills: python "
        "experience: built backend systems at Acme"
    )


@pytest.fixture
def jane_profile():
    return CandidateProfile(
        full_name="Jane Doe",
        email="jane@x.com",
        phone="5551234567",
        skills=["Python"],
        experience="built backend systems",
    )


@pytest.fixture
def jane_form():
    return {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "phone": "5551234567",
        "skills": "Python",
        "experience": "built backend systems",
    }
