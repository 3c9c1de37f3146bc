"""Custom exception hierarchy for the dnd-party character backend.

All exceptions inherit from DndPartyError, enabling unified error handling
at the service boundary while preserving domain-specific context in the
``details`` dictionary.

Example:
    >>> from dnd_party.core.exceptions import MissingAbilityDataError
    >>> raise MissingAbilityDataError("missing ability score for DEX", ability="DEX")
"""

from __future__ import annotations

from typing import Any


class DndPartyError(Exception):
    """Base exception for all dnd-party errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DndPartyError):
    """Raised when application configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DndPartyError):
    """Raised when request data fails schema validation.

    The character service converts pydantic validation failures into this
    exception so callers only have to handle the dnd-party hierarchy.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(DndPartyError):
    """Base exception for character sheet engine errors."""


class MissingAbilityDataError(GameEngineError):
    """Raised when a skill recompute needs an ability score that is absent.

    Every skill is driven by one of the six abilities. Deriving skills from
    an incomplete ability set would produce meaningless values, so the
    engine refuses instead.
    """

    def __init__(
        self,
        message: str,
        *,
        ability: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize missing ability error.

        Args:
            message: Human-readable error description.
            ability: The ability identifier that was missing.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if ability:
            combined_details["ability"] = ability
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when a dice roll request is malformed.

    This covers invalid die sizes and counts as well as unparseable dice
    notation.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class RandomSourceError(GameEngineError):
    """Raised when the random number source cannot produce a value.

    Not retried by the engine; callers surface it as a server-side failure.
    """


class CharacterNotFoundError(GameEngineError):
    """Raised when no character is stored under the requested name."""

    def __init__(
        self,
        message: str,
        *,
        character_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with the looked-up name.

        Args:
            message: Human-readable error description.
            character_name: The name that was looked up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character_name is not None:
            combined_details["character_name"] = character_name
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(DndPartyError):
    """Raised when the character store cannot read or write state."""


# =============================================================================
# Portrait Generation Exceptions
# =============================================================================


class PortraitError(DndPartyError):
    """Base exception for portrait generation failures."""

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize portrait error with model context.

        Args:
            message: Human-readable error description.
            model: Name of the image model involved.
            provider: Name of the image provider (e.g., 'openai').
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if model:
            combined_details["model"] = model
        if provider:
            combined_details["provider"] = provider
        super().__init__(message, details=combined_details)


class PortraitConnectionError(PortraitError):
    """Raised when the image service cannot be reached."""


class PortraitResponseError(PortraitError):
    """Raised when the image service returns an error or an unusable payload."""


class PortraitRateLimitError(PortraitError):
    """Raised when the image service rate limit is exceeded."""

    def __init__(
        self,
        message: str,
        *,
        retry_after_seconds: float | None = None,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize rate limit error with retry context.

        Args:
            message: Human-readable error description.
            retry_after_seconds: Seconds to wait before retrying.
            model: Name of the image model involved.
            provider: Name of the image provider.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if retry_after_seconds is not None:
            combined_details["retry_after_seconds"] = retry_after_seconds
        super().__init__(message, model=model, provider=provider, details=combined_details)


__all__ = [
    # Base exception
    "DndPartyError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "MissingAbilityDataError",
    "DiceRollError",
    "RandomSourceError",
    "CharacterNotFoundError",
    # Storage exceptions
    "StorageError",
    # Portrait exceptions
    "PortraitError",
    "PortraitConnectionError",
    "PortraitResponseError",
    "PortraitRateLimitError",
]
