import asyncio
import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.config import settings
from app.core.exceptions import StorageIOError, ValidationError
from app.services.supabase_storage import SupabaseStorage, safe_filename


class FakeBucket:
    def __init__(self, fail=False):
        self.fail = fail
        self.uploaded = []

    def upload(self, path, content, options):
        if self.fail:
            raise RuntimeError("bucket unavailable")
        self.uploaded.append((path, content, options))

    def get_public_url(self, path):
        return f"https://cdn.example/{path}"


class FakeClient:
    def __init__(self, bucket):
        self.bucket = bucket
        self.storage = self

    def from_(self, name):
        return self.bucket


def upload(storage, filename, content, content_type="application/pdf"):
    file = UploadFile(file=io.BytesIO(content), filename=filename, headers=Headers({"content-type": content_type}))
    return asyncio.run(storage.upload_payment_proof(file))


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def storage(bucket):
    storage = SupabaseStorage(bucket="proofs")
    storage._client = FakeClient(bucket)
    return storage


def test_safe_filename():
    assert safe_filename("../../etc/dekont 1.pdf") == "dekont_1.pdf"
    assert safe_filename("C:\\Users\\ali\\fiş.png") == "fiş.png"


def test_upload_returns_public_url(storage, bucket):
    url = upload(storage, "dekont.pdf", b"%PDF-1.4")

    path, content, options = bucket.uploaded[0]
    assert path.startswith("payment-proofs/")
    assert path.endswith("_dekont.pdf")
    assert content == b"%PDF-1.4"
    assert options == {"content-type": "application/pdf"}
    assert url == f"https://cdn.example/{path}"


def test_rejects_unsupported_type(storage, bucket):
    with pytest.raises(ValidationError):
        upload(storage, "script.exe", b"MZ", "application/octet-stream")
    assert bucket.uploaded == []


def test_rejects_empty_and_oversized_files(storage, monkeypatch):
    with pytest.raises(ValidationError):
        upload(storage, "dekont.pdf", b"")

    monkeypatch.setattr(settings, "PAYMENT_PROOF_MAX_MB", 1)
    with pytest.raises(ValidationError):
        upload(storage, "dekont.pdf", b"0" * (1024 * 1024 + 1))


def test_upload_failure_is_a_storage_error(storage, bucket):
    bucket.fail = True

    with pytest.raises(StorageIOError):
        upload(storage, "dekont.png", b"\x89PNG", "image/png")


def test_unconfigured_storage(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", "")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_KEY", "")

    with pytest.raises(StorageIOError):
        upload(SupabaseStorage(), "dekont.pdf", b"%PDF-1.4")
