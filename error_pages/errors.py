"""Error types understood by the error page middleware.

Views raise ``Abort`` to end a request with a specific status:

    from error_pages.errors import Abort

    def detail(request, pk):
        raise Abort(404, reason="Could not find it")

    def legacy(request):
        raise Abort.redirect("/new-location/")

Anything raised during a request is sorted once, by ``classify_error``,
into a ``StructuredError`` (carries a status) or an ``OpaqueError``
(everything else, always treated as a 500).
"""
from dataclasses import dataclass
from typing import Mapping, Optional

from django.core.exceptions import BadRequest, PermissionDenied, SuspiciousOperation
from django.http import Http404
from django.utils.datastructures import CaseInsensitiveMapping

# Inclusive range of statuses that represent an error (400 Bad Request
# through 511 Network Authentication Required).
FIRST_ERROR_STATUS = 400
LAST_ERROR_STATUS = 511

# Statuses Django can put on a response.
MIN_STATUS = 100
MAX_STATUS = 599


def represents_error(status):
    """Return True if the status code is in the 400..511 error range."""
    return FIRST_ERROR_STATUS <= status <= LAST_ERROR_STATUS


class Abort(Exception):
    """Stop handling the request and respond with ``status``.

    ``reason`` is a human-readable detail passed on to the error page.
    ``headers`` are only used for redirects (see ``Abort.redirect``).
    """

    def __init__(self, status, reason=None, headers=None):
        status = int(status)
        if not MIN_STATUS <= status <= MAX_STATUS:
            raise ValueError(
                "Abort status must be from %d to %d, got %d." % (MIN_STATUS, MAX_STATUS, status)
            )
        self.status = status
        self.reason = reason
        # Header names are case-insensitive.
        self.headers = CaseInsensitiveMapping(headers or {})
        super().__init__(reason or f"Abort {self.status}")

    @classmethod
    def redirect(cls, location, status=303):
        """Build an abort that sends the client to ``location``."""
        return cls(status, headers={"Location": location})

    @property
    def location(self):
        return self.headers.get("Location")


@dataclass(frozen=True)
class StructuredError:
    status: int
    reason: Optional[str] = None
    location: Optional[str] = None
    headers: Optional[Mapping[str, str]] = None
    exception: Optional[BaseException] = None

    @property
    def is_redirect(self):
        return self.location is not None and not represents_error(self.status)


@dataclass(frozen=True)
class OpaqueError:
    exception: Optional[BaseException] = None


# Django's own exceptions that carry an implied status.
_DJANGO_STATUSES = (
    (Http404, 404),
    (PermissionDenied, 403),
    (BadRequest, 400),
    (SuspiciousOperation, 400),
)


def classify_error(exception):
    """Sort a raised exception into ``StructuredError`` or ``OpaqueError``."""
    if isinstance(exception, Abort):
        return StructuredError(
            status=exception.status,
            reason=exception.reason,
            location=exception.location,
            headers=exception.headers,
            exception=exception,
        )
    for exc_class, status in _DJANGO_STATUSES:
        if isinstance(exception, exc_class):
            # An empty message means the view gave no reason.
            reason = str(exception) or None
            return StructuredError(status=status, reason=reason, exception=exception)
    return OpaqueError(exception=exception)
