"""
Environment configuration for FormCrypt tools.

Values come from the process environment, optionally seeded from a
.env file.
"""

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Runtime settings."""
    client_tag: Optional[str] = Field(None, description="Manifest '_client' attribute")
    log_level: str = Field("INFO", description="Logging level name")
    output_dir: str = Field("encrypted", description="Output directory for encrypted submissions")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.
        
        Args:
            dotenv_path: Optional .env file to load first (existing
                variables are not overridden)
        
        Returns:
            Settings instance
        """
        load_dotenv(dotenv_path)
        return cls(
            client_tag=os.getenv('FORMCRYPT_CLIENT_TAG') or None,
            log_level=os.getenv('FORMCRYPT_LOG_LEVEL', 'INFO').upper(),
            output_dir=os.getenv('FORMCRYPT_OUTPUT_DIR', 'encrypted'),
        )
