"""Error taxonomy shared by the remote service wrappers."""

from __future__ import annotations


class PromptMatrixError(Exception):
    """Base class for errors surfaced to the user as a status message."""


class ConfigurationError(PromptMatrixError):
    """Missing or invalid credential; fatal to every remote feature."""


class CommunicationError(PromptMatrixError):
    """Network or remote failure during a text request."""


class GenerationError(PromptMatrixError):
    """Image generation failed for a reason other than a safety block."""


class ContentPolicyError(GenerationError):
    """Image request rejected by the remote safety filter."""


class EmptyResultError(GenerationError):
    """Remote call succeeded but carried no usable payload."""


class MalformedResponseError(PromptMatrixError):
    """Structured response is missing required fields or has invalid values."""
