"""
Pydantic schemas for request/response validation
"""
from .job import JobDataRecord, JobRecord, StatusResponse

__all__ = ["JobDataRecord", "JobRecord", "StatusResponse"]
