from .error_presentation import ErrorPresentationMiddleware

__all__ = ["ErrorPresentationMiddleware"]
