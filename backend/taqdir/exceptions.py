"""Custom exception hierarchy for the Taqdir service."""

from __future__ import annotations


class TaqdirError(Exception):
    """Base exception for all Taqdir errors."""


class InvalidInputError(TaqdirError, ValueError):
    """Raised when a cost calculation request is malformed.

    Covers a missing, zero, negative or non-numeric land area, a
    ``room_types`` value that is not a list, and missing required fields.
    """


class CostEstimationError(TaqdirError):
    """Raised when cost estimation fails."""


class AIServiceUnavailableError(TaqdirError):
    """Raised when an AI-backed endpoint is called without an API key."""
