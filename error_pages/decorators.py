"""View decorator that applies the error page middleware to a single view.

    from error_pages.decorators import error_pages

    @error_pages(template_mapping={401: "401"})
    def account(request):
        ...

Takes the same keyword arguments as ErrorPresentationMiddleware:
context_generator, error_type and template_mapping.
"""
from django.utils.decorators import decorator_from_middleware_with_args

from .middleware import ErrorPresentationMiddleware

error_pages = decorator_from_middleware_with_args(ErrorPresentationMiddleware)
