# tests/console_ui/test_renderers.py
"""
Testes dos renderers de texto do Console UI.

Os testes asseguram que:
- a listagem de jobs segue o formato `<nome> <descrição da agenda>`
- eventos estruturados viram uma linha legível, com fase e hint
- resultados e lotes são resumidos sem alterar os payloads
"""

from atlas_laundry.console_ui.renderers import (
    NO_JOBS,
    render_batch,
    render_event,
    render_events,
    render_job_list,
    render_result,
)
from atlas_laundry.core.engine.executor import BatchResult
from atlas_laundry.core.errors import LaundryErrorPayload
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.types import JobPhase, JobResult, JobStatus


def test_render_job_list():
    assert render_job_list([]) == NO_JOBS
    pairs = [(Job(name="a"), "runs manually."), (Job(name="b"), "runs every 5 minutes.")]
    assert render_job_list(pairs) == "Current jobs:\na runs manually.\nb runs every 5 minutes."


def test_render_event_with_phase_and_hint():
    event = {
        "job": "a",
        "level": "error",
        "message": "a - error",
        "phase": "fetch",
        "error": {"hint": "Verifique o token."},
    }
    assert render_event(event) == "[ERROR] a: a - error (phase=fetch) - Verifique o token."
    assert render_event({"job": None, "level": "info", "message": "no jobs to run"}) == "[INFO] no jobs to run"
    assert render_events([event, event]).count("\n") == 1


def test_render_result_variants():
    ok = JobResult(job="a", status=JobStatus.SUCCESS, summary="job complete", items=2, persisted=True)
    unsaved = JobResult(job="a", status=JobStatus.SUCCESS, summary="job complete", items=2, persisted=False)
    failed = JobResult(job="b", status=JobStatus.FAILED, summary="boom", phase=JobPhase.FETCH)
    skipped = JobResult(job="c", status=JobStatus.SKIPPED, summary="missing input", phase=JobPhase.CONFIGURE)

    assert render_result(ok) == "a: ok (2 items)"
    assert render_result(unsaved) == "a: ok (2 items) - not persisted"
    assert render_result(failed) == "b: failed at fetch: boom"
    assert render_result(skipped) == "c: skipped at configure: missing input"


def test_render_batch():
    assert render_batch(BatchResult(run_id="r")) == "no jobs to run"

    error = LaundryErrorPayload(
        type="CYCLIC_SCHEDULE",
        message="Ciclo de agendas",
        details={},
        hint="Mude a agenda de um dos jobs.",
    )
    batch = BatchResult(
        run_id="r",
        results=[JobResult(job="a", status=JobStatus.SUCCESS, summary="job complete", items=1, persisted=True)],
        errors=[error],
    )
    assert render_batch(batch).splitlines() == [
        "a: ok (1 items)",
        "error: Ciclo de agendas",
        "  hint: Mude a agenda de um dos jobs.",
    ]
