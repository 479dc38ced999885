"""Error presentation middleware — renders templates for failed requests.

Any response with a status of 400 or above, and any exception raised by a
view, is turned into a rendered error page:

- 404 renders the "404" template;
- every other error status renders the "serverError" template;
- ERROR_PAGES["TEMPLATE_MAPPING"] can point specific statuses at other templates.

If the context generator or the template fails, a fixed HTML snippet is
returned instead, with the same status. Aborts that redirect (a non-error
status with a Location header) are passed straight through.
"""
import logging
import posixpath

from asgiref.sync import async_to_sync, iscoroutinefunction
from django.http import HttpResponse
from django.template.response import TemplateResponse
from django.utils.deprecation import MiddlewareMixin

from error_pages import conf
from error_pages.context import build_default_context
from error_pages.errors import Abort, StructuredError, classify_error

logger = logging.getLogger(__name__)

NOT_FOUND_TEMPLATE = "404"
SERVER_ERROR_TEMPLATE = "serverError"

FALLBACK_BODY = (
    "<h1>Internal Error</h1>"
    "<p>There was an internal error. Please try again later.</p>"
)
FALLBACK_CONTENT_TYPE = "text/html; charset=utf-8"

# Set on every response this middleware builds, so process_response
# leaves pages rendered by process_exception alone.
RENDERED_FLAG = "error_page_rendered"


class ErrorPresentationMiddleware(MiddlewareMixin):
    """
    Renders error pages for error responses and uncaught view exceptions.

    Arguments left as None are read from the ERROR_PAGES setting, once,
    when the middleware is built. Use it globally from MIDDLEWARE or per
    view through error_pages.decorators.error_pages.
    """

    def __init__(
        self,
        get_response,
        context_generator=None,
        error_type=None,
        template_mapping=None,
    ):
        super().__init__(get_response)
        if context_generator is None:
            context_generator = conf.get_setting("CONTEXT_GENERATOR")
        if error_type is None:
            error_type = conf.get_setting("ERROR_TYPE")
        if template_mapping is None:
            template_mapping = conf.get_setting("TEMPLATE_MAPPING")
        self.context_generator = conf.resolve_context_generator(context_generator)
        self.error_type = conf.resolve_error_type(error_type)
        self.template_mapping = conf.resolve_template_mapping(template_mapping)
        self.template_extension = conf.resolve_template_extension(
            conf.get_setting("TEMPLATE_EXTENSION")
        )

    def process_response(self, request, response):
        """Swap error responses (status >= 400) for a rendered page."""
        if getattr(response, RENDERED_FLAG, False):
            return response
        status = response.status_code
        if status < 400 or not self.error_type.handles(status):
            return response
        # The downstream response carries no detail beyond its status.
        return self.render(request, status, Abort(status))

    def process_exception(self, request, exception):
        """Log the exception and render the page for its status.

        Returns None (so Django keeps handling the exception) when this
        instance is restricted to a different class of error.
        """
        error = classify_error(exception)
        if isinstance(error, StructuredError):
            logger.error(
                "Request error: %s (status %d) - path: %s",
                exception, error.status, request.path,
            )
            if error.is_redirect:
                return self.redirect(error)
            status = error.status
        else:
            logger.error(
                "Request error: %r - path: %s", exception, request.path,
                exc_info=exception,
            )
            status = 500

        if not self.error_type.handles(status):
            return None
        return self.render(request, status, exception)

    def redirect(self, error):
        response = HttpResponse(status=error.status, headers=error.headers)
        setattr(response, RENDERED_FLAG, True)
        return response

    def template_name_for(self, status):
        if status in self.template_mapping:
            return self.template_mapping[status]
        if status == 404:
            return NOT_FOUND_TEMPLATE
        return SERVER_ERROR_TEMPLATE

    def template_path(self, template_name):
        """Append the configured extension to bare names like "404"."""
        if posixpath.splitext(template_name)[1]:
            return template_name
        return template_name + self.template_extension

    def get_context(self, status, error, request):
        generator = self.context_generator or build_default_context
        if iscoroutinefunction(generator):
            return async_to_sync(generator)(status, error, request)
        return generator(status, error, request)

    def render(self, request, status, error):
        """Render the page for ``status``, or the fallback snippet on failure."""
        template_name = self.template_name_for(status)
        if status != 404:
            logger.error(
                "Internal server error. Status: %d - path: %s", status, request.path
            )
        try:
            context = self.get_context(status, error, request)
            response = TemplateResponse(
                request,
                self.template_path(template_name),
                context,
                status=status,
            )
            response.render()
        except Exception as e:
            logger.warning("Failed to render custom error page - %s", e)
            response = HttpResponse(
                FALLBACK_BODY, status=status, content_type=FALLBACK_CONTENT_TYPE
            )
        setattr(response, RENDERED_FLAG, True)
        return response
