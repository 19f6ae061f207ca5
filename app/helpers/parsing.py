import io
from typing import Any

from pdfminer.high_level import extract_text as pdf_extract

from app.utils.exceptions import ExceptionContext, ValidationError
from app.utils.logging_config import extraction_timer, get_logger

logger = get_logger(__name__)

PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf")


def _as_byte(n: Any):
    # bool is an int subclass but never a byte value; whole floats (37.0) are accepted
    if isinstance(n, bool):
        return None
    if isinstance(n, float) and n.is_integer():
        n = int(n)
    if isinstance(n, int) and 0 <= n <= 255:
        return n
    return None


def bytes_from_payload(pdf_data: Any, max_bytes: int = None) -> bytes:
    """Turn a JSON list of byte values into bytes, rejecting anything else."""
    if not isinstance(pdf_data, list) or not pdf_data:
        raise ValidationError("PDF data must be a non-empty list of byte values", field="pdfData",
                              value=type(pdf_data).__name__)
    if max_bytes is not None and len(pdf_data) > max_bytes:
        raise ValidationError(f"PDF exceeds the {max_bytes} byte limit", field="pdfData", value=len(pdf_data))

    out = bytearray()
    for n in pdf_data:
        b = _as_byte(n)
        if b is None:
            raise ValidationError("PDF data contains a value that is not a byte", field="pdfData", value=n)
        out.append(b)
    return bytes(out)


def check_upload(content: bytes, content_type: str = None, max_bytes: int = None) -> bytes:
    """Structural checks for a multipart upload."""
    if content_type and content_type.split(";")[0].strip().lower() not in PDF_CONTENT_TYPES:
        raise ValidationError("Uploaded file is not a PDF", field="file", value=content_type)
    if not content:
        raise ValidationError("Uploaded file is empty", field="file")
    if max_bytes is not None and len(content) > max_bytes:
        raise ValidationError(f"PDF exceeds the {max_bytes} byte limit", field="file", value=len(content))
    return content


def read_pdf(data: bytes) -> str:
    """Extract plain text from PDF bytes. Raises ProcessingError if pdfminer fails."""
    with extraction_timer(logger, len(data)) as stats:
        with ExceptionContext("pdf_extraction", logger=logger, size=len(data)):
            text = pdf_extract(io.BytesIO(data)) or ""
        stats["chars"] = len(text)
    return text
