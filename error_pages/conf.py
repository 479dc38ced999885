"""Settings for the error page middleware.

Configure through a single ERROR_PAGES dict in Django settings:

    ERROR_PAGES = {
        "CONTEXT_GENERATOR": "myproject.errors.page_context",
        "ERROR_TYPE": "all",
        "TEMPLATE_MAPPING": {401: "401", 403: "403"},
        "TEMPLATE_EXTENSION": ".html",
    }

Every key is optional. Values passed directly to the middleware (or the
view decorator) take precedence over these settings.
"""
from enum import Enum
from types import MappingProxyType

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .errors import represents_error

DEFAULTS = {
    "CONTEXT_GENERATOR": None,
    "ERROR_TYPE": "all",
    "TEMPLATE_MAPPING": {},
    "TEMPLATE_EXTENSION": ".html",
}


class ErrorType(Enum):
    """Which classes of error a middleware instance renders pages for."""

    ALL = "all"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"

    def handles(self, status):
        if self is ErrorType.NOT_FOUND:
            return status == 404
        if self is ErrorType.SERVER_ERROR:
            return status != 404
        return True


def get_setting(name):
    """Return one ERROR_PAGES key, falling back to the default."""
    user_settings = getattr(settings, "ERROR_PAGES", None) or {}
    if not isinstance(user_settings, dict):
        raise ImproperlyConfigured("ERROR_PAGES must be a dict.")
    unknown = set(user_settings) - set(DEFAULTS)
    if unknown:
        raise ImproperlyConfigured(
            "Unknown ERROR_PAGES keys: %s" % ", ".join(sorted(unknown))
        )
    return user_settings.get(name, DEFAULTS[name])


def resolve_context_generator(value):
    """Accept a callable or a dotted import path; None means the default."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = import_string(value)
        except ImportError as e:
            raise ImproperlyConfigured(
                "ERROR_PAGES CONTEXT_GENERATOR %r could not be imported: %s" % (value, e)
            ) from e
    if not callable(value):
        raise ImproperlyConfigured("ERROR_PAGES CONTEXT_GENERATOR must be callable.")
    return value


def resolve_error_type(value):
    if isinstance(value, ErrorType):
        return value
    try:
        return ErrorType(value)
    except ValueError:
        choices = ", ".join(repr(t.value) for t in ErrorType)
        raise ImproperlyConfigured(
            "ERROR_PAGES ERROR_TYPE must be one of %s, got %r." % (choices, value)
        ) from None


def resolve_template_mapping(value):
    """Return a read-only {status: template name} mapping.

    Keys may be ints or numeric strings. Entries for statuses that do not
    represent an error can never be rendered, so they are dropped here.
    """
    if not isinstance(value, dict):
        raise ImproperlyConfigured("ERROR_PAGES TEMPLATE_MAPPING must be a dict.")
    mapping = {}
    for status, template_name in value.items():
        try:
            status = int(status)
        except (TypeError, ValueError):
            raise ImproperlyConfigured(
                "ERROR_PAGES TEMPLATE_MAPPING key %r is not a status code." % (status,)
            ) from None
        if not isinstance(template_name, str) or not template_name:
            raise ImproperlyConfigured(
                "ERROR_PAGES TEMPLATE_MAPPING[%d] must be a template name." % status
            )
        if represents_error(status):
            mapping[status] = template_name
    return MappingProxyType(mapping)


def resolve_template_extension(value):
    if not isinstance(value, str):
        raise ImproperlyConfigured("ERROR_PAGES TEMPLATE_EXTENSION must be a string.")
    return value
