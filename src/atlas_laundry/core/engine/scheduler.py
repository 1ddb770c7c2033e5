# src/atlas_laundry/core/engine/scheduler.py
"""
Driver do scheduler: liga gatilhos, cadeias e executor.

Pontos de entrada:
    - run_one(name) → cadeia do job pedido
    - run_all()     → cadeia de todas as raízes
    - tick(now)     → cadeia de cada job devido, um por vez, em ordem de registry

Regras de erro:
    - Em run_one/run_all, NotFoundError e CyclicScheduleError propagam: são
      erros do pedido e nenhum job rodou ainda
    - Em tick, um ciclo alcançado por um job devido vira um erro no lote e
      os demais jobs devidos seguem normalmente
    - Falhas de jobs individuais nunca saem do lote (ver PipelineExecutor)
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from atlas_laundry.core.context import SchedulerContext
from atlas_laundry.core.errors import LaundryErrorPayload, exception_to_error
from atlas_laundry.core.exceptions import CyclicScheduleError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.types import JobResult

from .chains import RUN_ALL, resolve_chain
from .executor import BatchResult, PipelineExecutor
from .triggers import due_jobs


def new_run_id() -> str:
    return uuid.uuid4().hex


class Scheduler:
    """Driver único de execução sobre um SchedulerContext."""

    def __init__(self, ctx: SchedulerContext, *, executor: Optional[PipelineExecutor] = None):
        self.ctx = ctx
        self.executor = executor or PipelineExecutor(ctx)

    def _run_chain(self, request: str) -> BatchResult:
        run_all = (request or "").strip().lower() == RUN_ALL
        sequence = resolve_chain(self.ctx.registry.list(), request)
        run_id = new_run_id()
        self.ctx.log(
            job=sequence[0].name if sequence and not run_all else None,
            level="info",
            message="batch started",
            run_id=run_id,
            request=request,
            sequence=[j.name for j in sequence],
        )
        return self.executor.run(sequence, run_id=run_id)

    def run_one(self, name: str) -> BatchResult:
        return self._run_chain(name)

    def run_all(self) -> BatchResult:
        return self._run_chain(RUN_ALL)

    def due(self, now: Optional[datetime] = None) -> List[Job]:
        return due_jobs(self.ctx.registry.list(), now or self.ctx.now())

    def tick(self, now: Optional[datetime] = None) -> BatchResult:
        """
        Avalia os gatilhos em `now` e roda a cadeia de cada job devido.

        Returns:
            BatchResult: resultados na ordem de execução e erros de cadeia.
        """
        now = now or self.ctx.now()
        run_id = new_run_id()
        due = self.due(now)

        if not due:
            self.ctx.log(job=None, level="info", message="no jobs to run", run_id=run_id)
            return BatchResult(run_id=run_id)

        results: List[JobResult] = []
        errors: List[LaundryErrorPayload] = []
        for job in due:
            try:
                sequence = resolve_chain(self.ctx.registry.list(), job.name)
            except CyclicScheduleError as exc:
                error = exception_to_error(exc)
                errors.append(error)
                self.ctx.log(
                    job=job.name,
                    level="error",
                    message=f"{job.name} - cyclic schedule",
                    run_id=run_id,
                    error=error.to_dict(),
                )
                continue
            results.extend(self.executor.run(sequence, run_id=run_id).results)

        return BatchResult(run_id=run_id, results=results, errors=errors)
