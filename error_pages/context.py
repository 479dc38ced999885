"""Default template context for error pages."""
from http.client import responses
from typing import TypedDict

from .errors import StructuredError, classify_error


class DefaultContext(TypedDict, total=False):
    status: str
    status_message: str
    reason: str


def build_default_context(status, error, request):
    """Build the context used when no custom context generator is configured.

    ``reason`` is only set when the error carried one, so templates can
    test ``{% if reason %}`` without seeing an empty string.
    """
    context = DefaultContext(
        status=str(status),
        status_message=responses.get(status, "Unknown Status Code"),
    )
    classified = classify_error(error)
    if isinstance(classified, StructuredError) and classified.reason is not None:
        context["reason"] = classified.reason
    return context
