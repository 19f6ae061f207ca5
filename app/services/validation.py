import math
from typing import Callable, List, Optional

from app.models.schemas import CandidateProfile, ValidationVerdict
from app.models.settings import MatchingSettings, get_matching_settings
from app.services.matching import contains, phone_matches
from app.utils.exceptions import CVValidatorBaseException, ValidationError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

SUCCESS_MESSAGE = "CV validation successful! All information matches the uploaded document."
FAILURE_MESSAGE = "CV validation failed. Some information doesn't match the uploaded document."
INVALID_FORMAT_MESSAGE = "Invalid PDF data format. Please upload a valid PDF file."
NO_TEXT_MESSAGE = "Could not extract text from the PDF. Please ensure the PDF is not image-based and try again."
PROCESSING_ERROR_MESSAGE = "Error processing the PDF file. Please try again with a different file."


def significant_experience_words(experience: str, settings: MatchingSettings) -> List[str]:
    stop_words = set(settings.stop_words)
    return [
        w for w in experience.split(" ")
        if len(w) >= settings.min_experience_word_length and w.lower() not in stop_words
    ]


def experience_ratio(document_text: str, experience: str, settings: MatchingSettings) -> float:
    """Share of significant experience words found in the document; 1.0 when there are none."""
    candidates = significant_experience_words(experience, settings)
    if not candidates:
        return 1.0
    found = sum(1 for w in candidates if contains(document_text, w))
    return found / len(candidates)


def _percent(ratio: float) -> int:
    # half-up, so 12.5% reads as 13%
    return int(math.floor(ratio * 100 + 0.5))


def validate_cv_content(
    profile: CandidateProfile,
    document_text: str,
    settings: Optional[MatchingSettings] = None
) -> ValidationVerdict:
    """
    Check every profile field against the extracted CV text.

    All checks run; each failing field adds one entry to the mismatch list, in the order
    name, email, phone, skills, experience.
    """
    settings = settings or get_matching_settings()
    mismatches: List[str] = []

    if not contains(document_text, profile.full_name):
        mismatches.append(f'Full Name: "{profile.full_name}" not found in CV')

    if not contains(document_text, profile.email):
        mismatches.append(f'Email: "{profile.email}" not found in CV')

    if not phone_matches(document_text, profile.phone, settings.phone_suffix_length):
        mismatches.append(f'Phone: "{profile.phone}" not found in CV')

    missing_skills = [s for s in profile.skills if not contains(document_text, s)]
    if missing_skills:
        mismatches.append(f"Skills not found in CV: {', '.join(missing_skills)}")

    ratio = experience_ratio(document_text, profile.experience, settings)
    if ratio < settings.experience_threshold:
        mismatches.append(f"Experience description doesn't match CV content ({_percent(ratio)}% match)")

    if not mismatches:
        logger.info("CV validation passed")
        return ValidationVerdict(success=True, message=SUCCESS_MESSAGE, mismatches=[])

    logger.info(f"CV validation failed with {len(mismatches)} mismatch(es)")
    return ValidationVerdict(success=False, message=FAILURE_MESSAGE, mismatches=mismatches)


def process_cv_submission(
    profile: CandidateProfile,
    load_bytes: Callable[[], bytes],
    extract: Callable[[bytes], str],
    settings: Optional[MatchingSettings] = None
) -> ValidationVerdict:
    """
    Run the full submission: payload checks, text extraction, then field validation.

    `load_bytes` performs the structural payload checks and raises ValidationError on a
    malformed upload. Upstream failures become fixed verdicts and no field check runs.
    """
    try:
        data = load_bytes()
    except ValidationError as e:
        logger.warning(f"Rejected PDF payload: {e.message}", extra={"details": e.details})
        return ValidationVerdict(success=False, message=INVALID_FORMAT_MESSAGE)

    try:
        text = extract(data)
    except CVValidatorBaseException as e:
        logger.error(f"PDF parsing error: {e.message}")
        return ValidationVerdict(success=False, message=PROCESSING_ERROR_MESSAGE)
    except Exception as e:
        logger.error(f"PDF parsing error: {e}", exc_info=True)
        return ValidationVerdict(success=False, message=PROCESSING_ERROR_MESSAGE)

    if not text or not text.strip():
        logger.warning(f"No text extracted from PDF ({len(data)} bytes)")
        return ValidationVerdict(success=False, message=NO_TEXT_MESSAGE)

    return validate_cv_content(profile, text, settings)
