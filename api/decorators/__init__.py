"""
API decorators
"""
from .error_handler import handle_api_errors, EXCEPTION_MAP

__all__ = ["handle_api_errors", "EXCEPTION_MAP"]
