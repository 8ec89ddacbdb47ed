"""
Utility modules for the ECR job store
"""
from .logger import setup_logger

__all__ = ["setup_logger"]
