import logging

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from app.services.validation import (
    FAILURE_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    NO_TEXT_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    SUCCESS_MESSAGE,
)
from app.utils.exceptions import ProcessingError

PDF_BYTES = list(b"%PDF-1.4 fake")


@pytest.fixture
def test_app():
    from fastapi import FastAPI
    from app.routers import cvs

    app = FastAPI()
    app.include_router(cvs.router, prefix="/cvs")
    return app


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


class TestValidateCVEndpoint:
    """Test cases for the JSON validation endpoint"""

    @patch('app.routers.cvs.read_pdf')
    def test_matching_cv(self, mock_read_pdf, client, jane_form, cv_text):
        mock_read_pdf.return_value = cv_text

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": SUCCESS_MESSAGE, "mismatches": []}
        mock_read_pdf.assert_called_once_with(bytes(PDF_BYTES))

    @patch('app.routers.cvs.read_pdf')
    def test_mismatching_cv(self, mock_read_pdf, client, jane_form):
        mock_read_pdf.return_value = "John Smith"

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is False
        assert data["message"] == FAILURE_MESSAGE
        assert len(data["mismatches"]) == 5
        assert data["mismatches"][0].startswith("Full Name")
        assert data["mismatches"][4].startswith("Experience")

    @patch('app.routers.cvs.read_pdf')
    def test_invalid_pdf_data(self, mock_read_pdf, client, jane_form):
        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": "not-a-list"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": INVALID_FORMAT_MESSAGE, "mismatches": []}
        mock_read_pdf.assert_not_called()

    @patch('app.routers.cvs.read_pdf')
    def test_image_only_pdf(self, mock_read_pdf, client, jane_form):
        mock_read_pdf.return_value = "  \n\f "

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert response.json()["message"] == NO_TEXT_MESSAGE

    @patch('app.routers.cvs.read_pdf')
    def test_extraction_failure(self, mock_read_pdf, client, jane_form):
        mock_read_pdf.side_effect = ProcessingError("corrupt")

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert response.status_code == 200
        assert response.json()["message"] == PROCESSING_ERROR_MESSAGE

    def test_invalid_email_rejected(self, client, jane_form):
        jane_form["email"] = "not-an-email"

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert response.status_code == 422

    def test_missing_field_rejected(self, client, jane_form):
        del jane_form["phone"]

        response = client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert response.status_code == 422


class TestValidateUploadEndpoint:
    """Test cases for the multipart upload endpoint"""

    @patch('app.routers.cvs.read_pdf')
    def test_matching_upload(self, mock_read_pdf, client, jane_form, cv_text):
        mock_read_pdf.return_value = cv_text

        response = client.post(
            "/cvs/validate/upload",
            data=jane_form,
            files={"file": ("cv.pdf", b"%PDF-1.4 fake", "application/pdf")},
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_read_pdf.assert_called_once_with(b"%PDF-1.4 fake")

    @patch('app.routers.cvs.read_pdf')
    def test_non_pdf_upload(self, mock_read_pdf, client, jane_form):
        response = client.post(
            "/cvs/validate/upload",
            data=jane_form,
            files={"file": ("cv.txt", b"Jane Doe", "text/plain")},
        )

        assert response.status_code == 200
        assert response.json()["message"] == INVALID_FORMAT_MESSAGE
        mock_read_pdf.assert_not_called()

    def test_blank_field_rejected(self, client, jane_form):
        jane_form["fullName"] = "   "

        response = client.post(
            "/cvs/validate/upload",
            data=jane_form,
            files={"file": ("cv.pdf", b"%PDF-1.4 fake", "application/pdf")},
        )

        assert response.status_code == 422


class TestEndpointLogging:
    """Test cases for endpoint outcome logging"""

    @patch('app.routers.cvs.read_pdf')
    def test_verdict_logged_without_field_values(self, mock_read_pdf, client, jane_form, caplog):
        mock_read_pdf.return_value = "John Smith"
        caplog.set_level(logging.INFO, logger="cv_validator")

        client.post("/cvs/validate", json={"formData": jane_form, "pdfData": PDF_BYTES})

        assert "validate_cv -> success=False mismatches=5" in caplog.text
        assert "jane@x.com" not in caplog.text
