# src/atlas_laundry/core/jobs/__init__.py
"""
Modelo de jobs do Atlas Laundry.

Componentes principais:
    - job       → Job e normalização de nomes
    - schedule  → variantes de agenda, parsing e representação persistida
    - registry  → JobRegistry (coleção ordenada, nomes únicos sem caixa)
    - types     → JobStatus, JobPhase, JobResult
    - lifecycle → criar/editar, destruir e listar jobs
"""

from .job import MAX_NAME_LENGTH, Job, sanitize_job_name
from .lifecycle import destroy_job, get_job, list_jobs, open_job, save_job
from .registry import DuplicateJobNameError, JobRegistry
from .schedule import (
    MANUAL,
    AfterJob,
    DailyTime,
    IntervalMinutes,
    Manual,
    Schedule,
    describe_schedule,
    parse_schedule,
    schedule_from_value,
    schedule_to_value,
)
from .types import JobPhase, JobResult, JobStatus

__all__ = [
    "MANUAL",
    "MAX_NAME_LENGTH",
    "AfterJob",
    "DailyTime",
    "DuplicateJobNameError",
    "IntervalMinutes",
    "Job",
    "JobPhase",
    "JobRegistry",
    "JobResult",
    "JobStatus",
    "Manual",
    "Schedule",
    "describe_schedule",
    "destroy_job",
    "get_job",
    "list_jobs",
    "open_job",
    "parse_schedule",
    "sanitize_job_name",
    "save_job",
    "schedule_from_value",
    "schedule_to_value",
]
