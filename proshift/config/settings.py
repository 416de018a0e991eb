# proshift/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "ProShift API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_db_name: str = "ProShift"
    mongodb_timeout_ms: int = 5000

    # Identity provider (ID tokens are JWTs signed with this key)
    identity_secret_key: str = os.getenv("IDENTITY_SECRET_KEY", "change-in-production")
    identity_algorithm: str = "HS256"
    identity_audience: Optional[str] = None
    identity_issuer: Optional[str] = None

    # Payment processor
    payment_api_url: str = "https://api.stripe.com"
    payment_secret_key: Optional[str] = None
    payment_currency: str = "usd"
    payment_timeout: int = 30

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 5000))
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
