"""
Process configuration read from the environment.

A .env file in the working directory is loaded first (existing environment
variables win). Settings are read once at startup by the entry points.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from docinterview.utils.generation_client import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """
    Attributes:
        api_key: Generation service credential (OPENAI_API_KEY)
        base_url: Generation service root (GENERATION_BASE_URL)
        model: Model identifier (GENERATION_MODEL)
        timeout: Outbound request timeout in seconds (GENERATION_TIMEOUT)
        host: Bind address for the Flask server (HOST)
        port: Port for the Flask server (PORT)
        log_level: Root logging level name (LOG_LEVEL)
    """
    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables

        Args:
            environ: Mapping to read instead of os.environ (tests)

        Raises:
            ValueError: If PORT or GENERATION_TIMEOUT is not numeric
        """
        env = os.environ if environ is None else environ

        api_key = env.get("OPENAI_API_KEY") or None
        if not api_key:
            logger.warning("Warning: OpenAI API key is not set")

        return Settings(
            api_key=api_key,
            base_url=env.get("GENERATION_BASE_URL", DEFAULT_BASE_URL),
            model=env.get("GENERATION_MODEL", DEFAULT_MODEL),
            timeout=float(env.get("GENERATION_TIMEOUT", DEFAULT_TIMEOUT)),
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", 5000)),
            log_level=env.get("LOG_LEVEL", "INFO").upper()
        )


def load_settings() -> Settings:
    """Load .env (if present) and read settings from the process environment"""
    load_dotenv(override=False)
    return Settings.from_env()
