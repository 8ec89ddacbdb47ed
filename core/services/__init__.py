"""
Core Services - 核心服务层
"""

from .job_store import JobStore

__all__ = ["JobStore"]
