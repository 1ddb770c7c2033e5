# src/atlas_laundry/console_ui/renderers.py
"""
Console UI Adapter (v1)

Objetivo:
- Renderizar listagens, eventos e resultados de lote como texto legível.
- NÃO altera payloads.
- NÃO executa jobs nem acessa o store.

Saídas:
- texto puro (str); estilo e cores ficam a cargo do CLI
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Tuple

from atlas_laundry.core.engine.executor import BatchResult
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.types import JobResult, JobStatus

NO_JOBS = 'There are no jobs configured. Use "laundry create" to make one.'

_STATUS_LABEL = {
    JobStatus.SUCCESS: "ok",
    JobStatus.SKIPPED: "skipped",
    JobStatus.FAILED: "failed",
}


def render_job_list(pairs: Sequence[Tuple[Job, str]]) -> str:
    """Listagem no formato `<nome> <descrição da agenda>`, uma linha por job."""
    if not pairs:
        return NO_JOBS
    lines = ["Current jobs:"]
    lines.extend(f"{job.name} {description}" for job, description in pairs)
    return "\n".join(lines)


def render_event(event: Mapping[str, Any]) -> str:
    level = str(event.get("level", "info")).upper()
    job = event.get("job")
    prefix = f"[{level}]" if not job else f"[{level}] {job}:"
    line = f"{prefix} {event.get('message', '')}"
    phase = event.get("phase")
    if phase:
        line += f" (phase={phase})"
    error = event.get("error")
    if isinstance(error, Mapping) and error.get("hint"):
        line += f" - {error['hint']}"
    return line


def render_events(events: Iterable[Mapping[str, Any]]) -> str:
    return "\n".join(render_event(e) for e in events)


def render_result(result: JobResult) -> str:
    label = _STATUS_LABEL.get(result.status, str(result.status))
    line = f"{result.job}: {label}"
    if result.status == JobStatus.SUCCESS:
        line += f" ({result.items} items)"
        if not result.persisted:
            line += " - not persisted"
    else:
        phase = result.phase.value if result.phase is not None else "?"
        line += f" at {phase}: {result.summary}"
    return line


def render_batch(batch: BatchResult) -> str:
    lines = [render_result(r) for r in batch.results]
    for error in batch.errors:
        lines.append(f"error: {error.message}")
        if error.hint:
            lines.append(f"  hint: {error.hint}")
    if not lines:
        lines.append("no jobs to run")
    return "\n".join(lines)
