from functools import partial

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from app.helpers.parsing import bytes_from_payload, check_upload, read_pdf
from app.models.schemas import CandidateProfile, CVFormData, ValidationRequest, ValidationVerdict
from app.models.settings import get_matching_settings, get_upload_settings
from app.services.validation import process_cv_submission
from app.utils.logging_config import get_logger, log_api_call

router = APIRouter()
logger = get_logger(__name__)


@router.post("/validate", response_model=ValidationVerdict)
@log_api_call("validate_cv")
async def validate_cv(request: ValidationRequest):
    """Validate form fields against a PDF sent as a JSON list of byte values"""
    upload_settings = get_upload_settings()
    profile = CandidateProfile.from_form(request.form_data)

    return await run_in_threadpool(
        process_cv_submission,
        profile,
        partial(bytes_from_payload, request.pdf_data, upload_settings.max_pdf_bytes),
        read_pdf,
        get_matching_settings(),
    )


@router.post("/validate/upload", response_model=ValidationVerdict)
@log_api_call("validate_cv_upload")
async def validate_cv_upload(
    full_name: str = Form(..., alias="fullName"),
    email: str = Form(...),
    phone: str = Form(...),
    skills: str = Form(...),
    experience: str = Form(...),
    file: UploadFile = File(...),
):
    """Validate form fields against an uploaded PDF file (multipart form)"""
    try:
        form = CVFormData(full_name=full_name, email=email, phone=phone, skills=skills, experience=experience)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_context=False)) from e
    upload_settings = get_upload_settings()
    content = await file.read()
    logger.debug(f"Received upload {file.filename!r} ({len(content)} bytes, {file.content_type})")

    return await run_in_threadpool(
        process_cv_submission,
        CandidateProfile.from_form(form),
        partial(check_upload, content, file.content_type, upload_settings.max_pdf_bytes),
        read_pdf,
        get_matching_settings(),
    )
