"""Settings for the recruiter pipeline, loaded from the environment."""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE_URL = "https://prism.backend.apexneural.cloud"


class Settings:
    """Configuration values read from environment variables.

    Attributes:
        api_base_url: Base URL of the hiring backend.
        access_token: Initial bearer token, if any.
        refresh_token: Initial refresh token, if any.
        org_name: Organization name sent with interview and offer payloads.
        org_email: Organization email sent with interview and offer payloads.
        request_timeout: Timeout in seconds for remote calls.
        log_level: Logging level name for the package logger.
        cors_origins: Origins allowed to call the console API.
    """

    def __init__(self):
        self.api_base_url: str = os.environ.get("PIPELINE_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")
        self.access_token: Optional[str] = os.environ.get("PIPELINE_ACCESS_TOKEN") or None
        self.refresh_token: Optional[str] = os.environ.get("PIPELINE_REFRESH_TOKEN") or None
        self.org_name: Optional[str] = os.environ.get("PIPELINE_ORG_NAME") or None
        self.org_email: Optional[str] = os.environ.get("PIPELINE_ORG_EMAIL") or None
        self.request_timeout: float = float(os.environ.get("PIPELINE_REQUEST_TIMEOUT", "30"))
        self.log_level: str = os.environ.get("PIPELINE_LOG_LEVEL", "INFO").upper()
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.environ.get(
                "PIPELINE_CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000"
            ).split(",")
            if origin.strip()
        ]


settings = Settings()
