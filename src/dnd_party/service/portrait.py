"""Character portrait generation.

The character sheet contributes only the prompt text. Turning that into an
image is the job of a PortraitGenerator; the bundled implementation calls
the OpenAI Images API (or any OpenAI-compatible endpoint).
"""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dnd_party.core.exceptions import (
    ConfigurationError,
    PortraitConnectionError,
    PortraitRateLimitError,
    PortraitResponseError,
)
from dnd_party.core.logging import get_logger


if TYPE_CHECKING:
    from openai import OpenAI

    from dnd_party.core.config import PortraitSettings
    from dnd_party.engine.sheet import Character

logger = get_logger(__name__)

PROVIDER = "openai"


def build_portrait_prompt(character: Character) -> str:
    """Assemble the image prompt from a character's descriptive fields."""
    return "\n".join(
        [
            f"Dungeons and Dragons character named {character.name}",
            f"Race: {character.race}",
            f"Physical description: {character.physical_description}",
            f"Alignment: {character.alignment}",
        ]
    )


@runtime_checkable
class PortraitGenerator(Protocol):
    """Turns a text prompt into encoded image bytes."""

    def generate(self, prompt: str) -> bytes:
        """Generate an image for ``prompt`` and return its bytes (PNG)."""
        ...


class OpenAIPortraitGenerator:
    """Portrait generator backed by the OpenAI Images API.

    Connection failures and rate limits are retried with exponential
    backoff; other API errors are raised immediately.

    Attributes:
        model: Image model identifier.
        size: Requested image size.
        max_retries: Attempts for transient failures.
        retry_wait: tenacity wait strategy between attempts.
    """

    def __init__(
        self,
        settings: PortraitSettings | None = None,
        *,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Portrait settings; defaults to the application settings.
            client: Pre-built OpenAI client. Built from settings when omitted.

        Raises:
            ConfigurationError: If no client is given and no API key is set.
        """
        if settings is None:
            from dnd_party.core.config import get_settings

            settings = get_settings().portrait

        self.model = settings.model
        self.size = settings.size
        self.max_retries = max(1, settings.max_retries)
        self.retry_wait = wait_exponential(multiplier=1, min=2, max=10)
        self._client = client if client is not None else self._build_client(settings)

        logger.info("OpenAIPortraitGenerator initialized", model=self.model, size=self.size)

    @staticmethod
    def _build_client(settings: PortraitSettings) -> OpenAI:
        if not settings.api_key:
            raise ConfigurationError(
                "Portrait API key not configured. Set DND_PARTY_PORTRAIT_API_KEY",
                config_key="portrait.api_key",
            )

        from openai import OpenAI

        return OpenAI(
            api_key=settings.api_key.get_secret_value(),
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            max_retries=0,
        )

    def generate(self, prompt: str) -> bytes:
        """Generate a portrait.

        Args:
            prompt: Text description of the character.

        Returns:
            Decoded image bytes.

        Raises:
            PortraitConnectionError: If the service stays unreachable.
            PortraitRateLimitError: If the service keeps rate limiting.
            PortraitResponseError: On API errors or an unusable payload.
        """
        call = retry(
            retry=retry_if_exception_type((PortraitConnectionError, PortraitRateLimitError)),
            stop=stop_after_attempt(self.max_retries),
            wait=self.retry_wait,
            reraise=True,
        )(self._call_images_api)
        return call(prompt)

    def _call_images_api(self, prompt: str) -> bytes:
        from openai import APIConnectionError, APIStatusError, RateLimitError

        try:
            response = self._client.images.generate(
                model=self.model,
                prompt=prompt,
                size=self.size,
                n=1,
                response_format="b64_json",
            )
        except RateLimitError as exc:
            raise PortraitRateLimitError(
                f"Image service rate limit exceeded: {exc}",
                model=self.model,
                provider=PROVIDER,
            ) from exc
        except APIConnectionError as exc:
            raise PortraitConnectionError(
                f"Failed to connect to image service: {exc}",
                model=self.model,
                provider=PROVIDER,
            ) from exc
        except APIStatusError as exc:
            raise PortraitResponseError(
                f"Image service error: {exc}",
                model=self.model,
                provider=PROVIDER,
                details={"status_code": exc.status_code},
            ) from exc

        if not response.data or not response.data[0].b64_json:
            raise PortraitResponseError(
                "Image service returned no image data",
                model=self.model,
                provider=PROVIDER,
            )

        try:
            image = base64.b64decode(response.data[0].b64_json, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise PortraitResponseError(
                f"Image payload is not valid base64: {exc}",
                model=self.model,
                provider=PROVIDER,
            ) from exc

        logger.debug("Portrait generated", model=self.model, size_bytes=len(image))
        return image


__all__ = [
    "PortraitGenerator",
    "OpenAIPortraitGenerator",
    "build_portrait_prompt",
]
