# app/config.py

from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./halisaha.db"

    # JWT
    SECRET_KEY: str = "supersecreto123"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Admin account (single owner login)
    ADMIN_EMAIL: str = "admin@halisaha.local"
    ADMIN_PASSWORD_HASH: Optional[str] = None

    # Supabase storage for payment proofs
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_KEY: Optional[str] = None  # service_role key
    SUPABASE_BUCKET: str = "payment-proofs"
    PAYMENT_PROOF_MAX_MB: int = 10

    # Email sender
    RESEND_API_KEY: Optional[str] = None
    SENDER_EMAIL: str = "Halı Saha <no-reply@halisaha.app>"

    # CORS
    FRONTEND_URLS: str = "http://localhost:5173,http://localhost:3000"
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    # Slot times are local to the fields
    TIMEZONE: str = "Europe/Istanbul"

    # =======================================================
    # Automatic rejection of stale pending reservations
    # =======================================================
    AUTO_REJECT_ENABLED: bool = True
    AUTO_REJECT_INTERVAL_MINUTES: float = 30
    AUTO_REJECT_GRACE_HOURS: int = 24

    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins(self) -> List[str]:
        urls = self.FRONTEND_URLS.split(",")
        all_urls = []
        for url in urls:
            url = url.strip()
            if url:
                all_urls.append(url)
                # Add the https variant of every http origin
                if url.startswith("http://"):
                    all_urls.append(url.replace("http://", "https://"))
        return all_urls

    class Config:
        env_file = ".env"

settings = Settings()
