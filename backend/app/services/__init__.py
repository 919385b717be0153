"""Service exports."""

from . import health, job_queue

__all__ = ["health", "job_queue"]
