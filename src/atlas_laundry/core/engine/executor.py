# src/atlas_laundry/core/engine/executor.py
"""
Executor de pipelines de jobs do Atlas Laundry.

Para cada job da sequência, estritamente em ordem:
    1. Verifica a configuração (conectores de entrada e saída presentes);
       um job incompleto é reportado como SKIPPED, nunca derruba o lote.
    2. authorize (entrada, se suportado) → fetch → authorize (saída) → push.
    3. Sucesso: `last_run = agora` e o registry inteiro é persistido de
       forma síncrona antes do próximo job.
    4. Falha em qualquer fase: o erro é registrado com job e fase,
       `last_run` não avança e o lote continua no próximo job.

Ajustes (guardrails):
- Exceções de conectores viram LaundryErrorPayload (serializável, acionável);
  o operador nunca recebe stack trace cru.
- Uma falha de persistência após um job bem-sucedido não desfaz o sucesso:
  o resultado sai com `persisted=False` e o erro é reportado ao chamador.
- Cada tentativa gera um JobRunRecord gravado no diretório de artefatos
  do job (best-effort: falha aqui é registrada e nunca aborta o lote).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from atlas_laundry import __version__
from atlas_laundry.core.connectors.base import ConnectorInstance, SupportsAuthorization
from atlas_laundry.core.context import SchedulerContext
from atlas_laundry.core.errors import (
    PERSISTENCE_ERROR,
    LaundryErrorPayload,
    connector_error,
    exception_to_error,
    persistence_error,
)
from atlas_laundry.core.exceptions import ConnectorError, JobConfigurationError, PersistenceError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.types import JobPhase, JobResult, JobStatus
from atlas_laundry.core.traceability.run_record import (
    JobRunRecord,
    add_event,
    create_run_record,
    record_failed,
    record_finished,
)


@dataclass(frozen=True)
class BatchResult:
    """Resultado agregado de um lote (run_one, run_all ou tick)."""

    run_id: str
    results: List[JobResult] = field(default_factory=list)
    errors: List[LaundryErrorPayload] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and all(r.ok and r.persisted for r in self.results)

    @property
    def succeeded(self) -> List[JobResult]:
        return [r for r in self.results if r.status == JobStatus.SUCCESS]

    @property
    def failed(self) -> List[JobResult]:
        return [r for r in self.results if r.status != JobStatus.SUCCESS]

    @property
    def persistence_errors(self) -> List[Dict[str, Any]]:
        return [
            r.payload["persistence_error"]
            for r in self.results
            if "persistence_error" in r.payload
        ]

    def result_for(self, job_name: str) -> Optional[JobResult]:
        wanted = job_name.lower()
        return next((r for r in self.results if r.job.lower() == wanted), None)

    def raise_for_persistence(self) -> None:
        """Levanta a primeira falha de persistência do lote, se houver."""
        for error in self.persistence_errors:
            raise PersistenceError(
                error.get("message", "Falha ao persistir o registro de jobs"),
                details=dict(error.get("details", {}) or {}),
                hint=error.get("hint"),
            )


class PipelineExecutor:
    """Executor canônico: roda uma sequência de jobs, um de cada vez."""

    def __init__(self, ctx: SchedulerContext):
        self.ctx = ctx

    # ------------------------------------------------------------------
    # Guardrails: exceção -> LaundryErrorPayload
    # ------------------------------------------------------------------

    def _phase_error(
        self,
        *,
        job: Job,
        phase: JobPhase,
        instance: Optional[ConnectorInstance],
        exc: Exception,
    ) -> LaundryErrorPayload:
        connector = instance.type_id if instance is not None else None
        if isinstance(exc, ConnectorError):
            base = exception_to_error(exc)
            details = dict(base.details)
            details.update({"job": job.name, "phase": phase.value, "connector": connector})
            return replace(base, details=details)
        return connector_error(
            job=job.name,
            phase=phase.value,
            connector=connector,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )

    def _persist_run_record(self, record: JobRunRecord, run_id: str) -> None:
        store = self.ctx.store
        if store is None or not self.ctx.persist_run_records:
            return
        try:
            store.save_run_record(record)
        except PersistenceError as exc:
            self.ctx.log(
                job=record.job,
                level="warning",
                message="run record not persisted",
                run_id=run_id,
                error=exception_to_error(exc).to_dict(),
            )

    # ------------------------------------------------------------------
    # Fases
    # ------------------------------------------------------------------

    def _authorize(self, instance: ConnectorInstance) -> None:
        connector = instance.connector
        if isinstance(connector, SupportsAuthorization):
            connector.authorize(instance.settings)

    def _skip(
        self, job: Job, record: JobRunRecord, run_id: str, started, exc: JobConfigurationError
    ) -> JobResult:
        missing = exc.details["missing"]
        error = exception_to_error(exc).to_dict()
        self.ctx.log(
            job=job.name,
            level="error",
            message="job skipped: missing connector",
            run_id=run_id,
            phase=JobPhase.CONFIGURE.value,
            missing=missing,
        )
        finished = self.ctx.now()
        record_failed(
            record,
            ts=finished,
            status=JobStatus.SKIPPED.value,
            phase=JobPhase.CONFIGURE.value,
            error=error,
        )
        self._persist_run_record(record, run_id)
        return JobResult(
            job=job.name,
            status=JobStatus.SKIPPED,
            summary=error["message"],
            phase=JobPhase.CONFIGURE,
            started_at=started,
            finished_at=finished,
            payload={"error": error},
        )

    def run_job(self, job: Job, *, run_id: str) -> JobResult:
        started = self.ctx.now()
        record = create_run_record(
            run_id=run_id,
            job=job.name,
            started_at=started,
            laundry_version=__version__,
            config_hash=self.ctx.config_hash,
            input_type=job.input.type_id if job.input is not None else None,
            output_type=job.output.type_id if job.output is not None else None,
        )
        add_event(record, event_type="job_started", ts=started)

        try:
            job.check_connectors()
        except JobConfigurationError as exc:
            return self._skip(job, record, run_id, started, exc)

        source, sink = job.input, job.output
        phase = JobPhase.AUTHORIZE
        instance = source
        items: List[Any] = []
        try:
            self._authorize(source)

            phase = JobPhase.FETCH
            self.ctx.log(job=job.name, level="info", message=f"{job.name}/{source.name} - input",
                         run_id=run_id, phase=phase.value)
            items = list(source.connector.fetch(source.settings) or [])
            add_event(record, event_type="fetch_completed", ts=self.ctx.now(),
                      phase=phase.value, payload={"items": len(items)})

            phase = JobPhase.AUTHORIZE
            instance = sink
            self._authorize(sink)

            phase = JobPhase.PUSH
            self.ctx.log(job=job.name, level="info", message=f"{job.name}/{sink.name} - output",
                         run_id=run_id, phase=phase.value, items=len(items))
            sink.connector.push(items, sink.settings)
            add_event(record, event_type="push_completed", ts=self.ctx.now(),
                      phase=phase.value, payload={"items": len(items)})

        except Exception as e:
            error = self._phase_error(job=job, phase=phase, instance=instance, exc=e)
            self.ctx.log(
                job=job.name,
                level="error",
                message=f"{job.name} - error",
                run_id=run_id,
                phase=phase.value,
                error=error.to_dict(),
            )
            finished = self.ctx.now()
            record_failed(
                record,
                ts=finished,
                status=JobStatus.FAILED.value,
                phase=phase.value,
                error=error.to_dict(),
                items=len(items),
            )
            self._persist_run_record(record, run_id)
            return JobResult(
                job=job.name,
                status=JobStatus.FAILED,
                summary=error.message,
                phase=phase,
                items=len(items),
                started_at=started,
                finished_at=finished,
                payload={"error": error.to_dict()},
            )

        finished = self.ctx.now()
        job.last_run = finished

        payload: Dict[str, Any] = {}
        warnings: List[str] = []
        persisted = True
        try:
            self.ctx.save()
        except PersistenceError as exc:
            persisted = False
            base = exception_to_error(exc)
            if base.type != PERSISTENCE_ERROR:
                base = persistence_error(exc_message=str(exc))
            payload["persistence_error"] = base.to_dict()
            warnings.append("job completed but the registry was not persisted")
            self.ctx.log(
                job=job.name,
                level="error",
                message=f"{job.name} - not persisted",
                run_id=run_id,
                phase=JobPhase.COMMIT.value,
                error=base.to_dict(),
            )

        self.ctx.log(job=job.name, level="info", message=f"{job.name} - complete",
                     run_id=run_id, items=len(items), persisted=persisted)
        record_finished(record, ts=finished, items=len(items))
        self._persist_run_record(record, run_id)

        return JobResult(
            job=job.name,
            status=JobStatus.SUCCESS,
            summary="job complete",
            items=len(items),
            persisted=persisted,
            started_at=started,
            finished_at=finished,
            warnings=warnings,
            payload=payload,
        )

    def run(self, jobs: Sequence[Job], *, run_id: str) -> BatchResult:
        results: List[JobResult] = []
        for job in jobs:
            results.append(self.run_job(job, run_id=run_id))
        return BatchResult(run_id=run_id, results=results)
