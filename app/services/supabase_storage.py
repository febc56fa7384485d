# app/services/supabase_storage.py
from datetime import datetime
from fastapi import UploadFile
from supabase import create_client
import logging
import re

from app.config import settings
from app.core.exceptions import StorageIOError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf", "png", "jpg", "jpeg", "webp"}


def safe_filename(filename: str) -> str:
    name = filename.replace("\\", "/").split("/")[-1]
    return re.sub(r"[^\w.\-]", "_", name) or "dekont"


class SupabaseStorage:
    """Stores payment proofs and returns their public URL; contents are never inspected."""

    def __init__(self, bucket: str = None):
        self.bucket = bucket or settings.SUPABASE_BUCKET
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
                raise StorageIOError("File storage is not configured")
            # SERVICE KEY is required for writes
            self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        return self._client

    async def upload_payment_proof(
        self,
        file: UploadFile,
        folder: str = "payment-proofs",
        max_size_mb: int = None,
    ) -> str:
        """Uploads the receipt and returns its public URL"""
        max_size_mb = max_size_mb or settings.PAYMENT_PROOF_MAX_MB
        content = await file.read()
        if not content:
            raise ValidationError("The uploaded payment proof is empty")
        if len(content) > max_size_mb * 1024 * 1024:
            raise ValidationError(f"The payment proof is too large (max {max_size_mb}MB)")

        filename = safe_filename(file.filename or "dekont")
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError("File type not allowed. Use PDF, PNG, JPG, JPEG or WEBP")

        storage_path = f"{folder}/{int(datetime.now().timestamp() * 1000)}_{filename}"
        try:
            self.client.storage.from_(self.bucket).upload(
                storage_path,
                content,
                {"content-type": file.content_type or "application/octet-stream"},
            )
            url = self.client.storage.from_(self.bucket).get_public_url(storage_path)
        except StorageIOError:
            raise
        except Exception as e:
            logger.error(f"❌ Payment proof upload failed: {e}")
            raise StorageIOError("Could not upload the payment proof")

        logger.info(f"📤 Payment proof stored at {storage_path}")
        return url


# Global instance
storage_service = SupabaseStorage()


def get_storage() -> SupabaseStorage:
    return storage_service
