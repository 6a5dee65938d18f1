"""Error types shared by the proxy service and the analysis client."""

from __future__ import annotations


class AnalysisError(RuntimeError):
    """Raised by the analysis client; the message is safe to show to the user."""


class NoFaceDetectedError(ValueError):
    """The face-presence probe did not answer yes."""


class InvalidRequestError(ValueError):
    """The proxy request body is missing fields or names an unknown feature."""
