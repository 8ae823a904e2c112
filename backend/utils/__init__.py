"""
Utility functions and decorators.
"""

from .error_handlers import handle_api_errors
from .logging_utils import log_operation, StructuredLogger

__all__ = ["handle_api_errors", "log_operation", "StructuredLogger"]
