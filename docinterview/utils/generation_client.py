"""
Generation Client - Chat-completion wrapper for the external text service

Responsibilities:
- Send a system + user message pair to an OpenAI-compatible endpoint
- Extract the generated text from the response
- Translate transport and protocol failures into UpstreamError
- Optional diagnostics (token counts, latency)

Design principles:
- Dependency injection (no singleton); the Flask app owns one instance
- Missing credentials do not fail construction, only calls
- A response without content is "no content" (None), never a crash
- No retries; callers decide what a failure means
"""

import logging
import time
from typing import Any, Dict, Optional, Union

import requests

from docinterview.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT = 60
CHAT_COMPLETIONS_PATH = "/chat/completions"

ROLE_SYSTEM = "system"
ROLE_USER = "user"


class GenerationClient:
    """Thin client for a chat-completion generation service"""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """
        Args:
            api_key: Bearer credential. None is allowed; calls then fail with
                UpstreamError instead of failing at startup.
            base_url: Service root, e.g. https://api.openai.com/v1
            model: Model identifier sent with every request
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

        if not api_key:
            logger.warning("Generation API key is not set; generation calls will fail")

        logger.info(f"Generation client initialized (model={model}, base_url={self.base_url})")

    def is_configured(self) -> bool:
        """True when a credential is available"""
        return bool(self.api_key)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 150,
        return_diagnostics: bool = False
    ) -> Union[Optional[str], Dict[str, Any]]:
        """
        Request one chat completion

        Args:
            system_prompt: Role instructions
            user_prompt: Task-specific content
            temperature: Sampling temperature
            max_tokens: Maximum output length
            return_diagnostics: Include token usage and latency

        Returns:
            str: Generated text (untrimmed), or None if the response carried
                no content (if return_diagnostics=False)
            dict: {'text': str | None, 'diagnostics': {...}} (if return_diagnostics=True)

        Raises:
            UpstreamError: Missing credential, network failure, non-2xx status,
                or a body that is not JSON
        """
        if not self.is_configured():
            raise UpstreamError("Generation service credential is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": ROLE_SYSTEM, "content": system_prompt},
                {"role": ROLE_USER, "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        start_time = time.time()
        try:
            response = requests.post(
                f"{self.base_url}{CHAT_COMPLETIONS_PATH}",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"Generation service returned an error status: {e}")
            raise UpstreamError(f"Generation service error: {e}") from e
        except requests.RequestException as e:
            logger.error(f"Generation service request failed: {e}")
            raise UpstreamError(f"Generation service unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Generation service returned a non-JSON body: {e}")
            raise UpstreamError("Generation service returned a malformed response") from e

        elapsed_ms = (time.time() - start_time) * 1000
        text = self._extract_content(data)

        if text is None:
            logger.warning("Generation service response carried no content")

        if return_diagnostics:
            usage = data.get("usage") if isinstance(data, dict) else None
            usage = usage or {}
            return {
                "text": text,
                "diagnostics": {
                    "prompt_tokens": usage.get("prompt_tokens", 0),
                    "completion_tokens": usage.get("completion_tokens", 0),
                    "latency_ms": elapsed_ms,
                    "model": self.model,
                }
            }

        return text

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        """
        Read choices[0].message.content, tolerating any missing level

        Returns:
            str or None
        """
        if not isinstance(data, dict):
            return None

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return None

        first = choices[0]
        if not isinstance(first, dict):
            return None

        message = first.get("message")
        if not isinstance(message, dict):
            return None

        content = message.get("content")
        return content if isinstance(content, str) else None

    def get_client_info(self) -> Dict[str, Any]:
        """Client metadata for health checks (never includes the credential)"""
        return {
            "model": self.model,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "configured": self.is_configured(),
        }
