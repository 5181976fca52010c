"""
Test Suite for Document Uploads

Run with: pytest tests/test_uploads.py -v
"""

import asyncio

import pytest

from app.core.config import settings
from app.core.errors import InternalError, ValidationError
from app.modules.uploads import services
from app.modules.uploads.services import read_upload, sanitize_filename, store_document
from app.shared.models.audit import AuditAction, AuditLog


PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


def upload(client, headers, name="certificate.pdf", content=PDF_BYTES, content_type="application/pdf"):
    return client.post("/api/upload", files={"file": (name, content, content_type)}, headers=headers)


class CountingFile:
    """Stand-in for UploadFile that serves `size` bytes and counts what was read."""

    filename = "huge.pdf"

    def __init__(self, size):
        self.remaining = size
        self.bytes_read = 0

    async def read(self, size=-1):
        n = self.remaining if size < 0 else min(size, self.remaining)
        self.remaining -= n
        self.bytes_read += n
        return b"x" * n


class TestSanitizeFilename:

    @pytest.mark.parametrize("raw,expected", [
        ("certificate.pdf", "certificate.pdf"),
        ("death certificate (1).pdf", "death_certificate_1_.pdf"),
        ("../../etc/passwd", "passwd"),
        ("", "document"),
        (None, "document"),
    ])
    def test_sanitize(self, raw, expected):
        assert sanitize_filename(raw) == expected


class TestReadUpload:

    def test_reads_whole_file_under_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)
        file = CountingFile(1000)

        content = asyncio.run(read_upload(file, chunk_size=256))

        assert len(content) == 1000

    def test_stops_just_past_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)
        file = CountingFile(50 * 1024 * 1024)

        with pytest.raises(ValidationError) as exc:
            asyncio.run(read_upload(file, chunk_size=256))

        assert file.bytes_read == 1025
        assert exc.value.fields == ["file"]
        assert "too large" in exc.value.message


class TestUpload:

    def test_upload_pdf(self, client, db_session, owner, owner_headers):
        response = upload(client, owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["size"] == len(PDF_BYTES)
        assert body["type"] == "application/pdf"
        assert body["originalName"] == "certificate.pdf"
        assert body["fileName"].startswith(f"{owner.id}/")
        assert body["fileName"].endswith("-certificate.pdf")
        assert body["url"] == f"/files/{body['fileName']}"

        stored = settings.UPLOAD_DIR / body["fileName"]
        assert stored.read_bytes() == PDF_BYTES

        audit = db_session.query(AuditLog).filter(AuditLog.action == AuditAction.FILE_UPLOAD).one()
        assert audit.user_id == owner.id

    def test_uploaded_file_is_served(self, client, owner_headers):
        url = upload(client, owner_headers).json()["url"]

        response = client.get(url)

        assert response.status_code == 200
        assert response.content == PDF_BYTES

    @pytest.mark.parametrize("content_type,content", [
        ("image/jpeg", JPEG_BYTES),
        ("image/png", PNG_BYTES),
    ])
    def test_images_accepted(self, client, owner_headers, content_type, content):
        response = upload(client, owner_headers, name="scan.img", content=content, content_type=content_type)

        assert response.status_code == 200

    def test_wrong_type_rejected(self, client, owner_headers):
        response = upload(client, owner_headers, name="cert.gif", content=b"GIF89a", content_type="image/gif")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "file"

    @pytest.mark.parametrize("name,content", [
        ("Shell script", b"#!/bin/sh\nrm -rf /\n"),
        ("PNG labelled as PDF", PNG_BYTES),
        ("Plain text", b"certificate of death"),
    ])
    def test_content_must_match_declared_type(self, client, owner_headers, name, content):
        response = upload(client, owner_headers, name="cert.pdf", content=content)

        assert response.status_code == 400, name
        assert "does not match" in response.json()["errors"][0]["message"]

    def test_empty_file_rejected(self, client, owner_headers):
        response = upload(client, owner_headers, content=b"")

        assert response.status_code == 400

    def test_too_large_rejected(self, client, owner_headers, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)

        response = upload(client, owner_headers, content=PDF_BYTES)

        assert response.status_code == 400
        assert "too large" in response.json()["message"]

    def test_file_removed_when_audit_commit_fails(self, db_session, owner, monkeypatch):
        user_dir = settings.UPLOAD_DIR / str(owner.id)
        before = set(user_dir.iterdir()) if user_dir.exists() else set()

        def failing_commit(db, what):
            raise InternalError()

        monkeypatch.setattr(services, "commit_or_raise", failing_commit)

        with pytest.raises(InternalError):
            store_document(db_session, owner.id, "certificate.pdf", "application/pdf", PDF_BYTES)

        assert set(user_dir.iterdir()) == before

    def test_missing_file_field(self, client, owner_headers):
        response = client.post("/api/upload", data={"other": "value"}, headers=owner_headers)

        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = upload(client, {})

        assert response.status_code == 401
