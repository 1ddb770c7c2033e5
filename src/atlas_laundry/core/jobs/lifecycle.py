# src/atlas_laundry/core/jobs/lifecycle.py
"""
Ciclo de vida de jobs: criar, editar, destruir e listar.

Regras:
- Criar um job com nome já existente edita o job no lugar (nunca duplica).
- Destruir remove o job do registry, apaga os artefatos que ele possui
  no store e persiste o registry.
- Toda mutação persiste de forma síncrona; PersistenceError propaga ao chamador.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from .job import Job, sanitize_job_name
from .schedule import describe_schedule

if TYPE_CHECKING:  # pragma: no cover
    from atlas_laundry.core.context import SchedulerContext


def open_job(ctx: "SchedulerContext", raw_name: str) -> Tuple[Job, bool]:
    """Retorna o job existente (edição) ou um novo job não registrado.

    Returns:
        Tuple[Job, bool]: o job e se ele já existia.
    """
    name = sanitize_job_name(raw_name)
    existing = ctx.registry.find(name)
    if existing is not None:
        return existing, True
    return Job(name=name), False


def get_job(ctx: "SchedulerContext", name: str) -> Job:
    return ctx.registry.get(name)


def save_job(ctx: "SchedulerContext", job: Job) -> Job:
    ctx.registry.upsert(job)
    ctx.save()
    ctx.log(job=job.name, level="info", message="job saved")
    return job


def destroy_job(ctx: "SchedulerContext", name: str) -> Job:
    job = ctx.registry.get(name)
    if ctx.store is not None:
        ctx.store.delete_artifacts(job.name)
    ctx.registry.remove(job.name)
    ctx.save()
    ctx.log(job=job.name, level="info", message="job destroyed")
    return job


def list_jobs(ctx: "SchedulerContext") -> List[Tuple[Job, str]]:
    return [(job, describe_schedule(job.schedule)) for job in ctx.registry.list()]
