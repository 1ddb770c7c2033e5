"""Persistência do Atlas Laundry (registro de jobs e artefatos por job)."""

from .job_store import STORE_FORMAT_VERSION, JobStore

__all__ = ["STORE_FORMAT_VERSION", "JobStore"]
