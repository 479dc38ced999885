"""Template-rendered error pages for Django."""
from .conf import ErrorType
from .context import DefaultContext, build_default_context
from .errors import Abort

__all__ = ["Abort", "DefaultContext", "ErrorType", "build_default_context"]
