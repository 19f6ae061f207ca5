import re
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# -------- Match policies --------
class MatchPolicy(str, Enum):
    """How a profile field is looked up in the CV text"""
    EXACT_EMAIL_SUBSTRING = "exact_email_substring"
    ALL_WORDS_PRESENT = "all_words_present"
    DIGIT_SUFFIX_OVERLAP = "digit_suffix_overlap"
    FUZZY_WORD_RATIO = "fuzzy_word_ratio"


FIELD_POLICIES: Dict[str, MatchPolicy] = {
    "full_name": MatchPolicy.ALL_WORDS_PRESENT,
    "email": MatchPolicy.EXACT_EMAIL_SUBSTRING,
    "phone": MatchPolicy.DIGIT_SUFFIX_OVERLAP,
    "skills": MatchPolicy.ALL_WORDS_PRESENT,
    "experience": MatchPolicy.FUZZY_WORD_RATIO,
}


# -------- Form input --------
class CVFormData(BaseModel):
    """Form fields as submitted by the client"""
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName")
    email: str
    phone: str
    skills: str  # comma separated
    experience: str

    @field_validator('full_name', 'email', 'phone', 'skills', 'experience')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('Field must not be empty')
        return v

    @field_validator('email')
    @classmethod
    def looks_like_email(cls, v):
        if not _EMAIL_RE.match(v.strip()):
            raise ValueError('Invalid email address')
        return v


class ValidationRequest(BaseModel):
    """JSON validation request: form fields plus the raw PDF as a list of byte values"""
    model_config = ConfigDict(populate_by_name=True)

    form_data: CVFormData = Field(..., alias="formData")
    # checked by the pipeline so a bad payload gets the invalid-format verdict instead of a 422
    pdf_data: Any = Field(..., alias="pdfData")


# -------- Core types --------
class CandidateProfile(BaseModel):
    """Claims made by the candidate, fixed for the duration of one validation"""
    model_config = ConfigDict(frozen=True)

    full_name: str
    email: str
    phone: str
    skills: List[str] = []
    experience: str

    @classmethod
    def from_form(cls, form: CVFormData) -> "CandidateProfile":
        skills = [s.strip() for s in form.skills.split(",")]
        return cls(
            full_name=form.full_name,
            email=form.email,
            phone=form.phone,
            skills=[s for s in skills if s],
            experience=form.experience,
        )


class ValidationVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    mismatches: List[str] = []
