# tests/core/jobs/test_lifecycle.py
"""
Testes do ciclo de vida de jobs (criar/editar, destruir, listar).

Os testes asseguram que:
- criar um job com nome existente devolve o job existente (edição no lugar)
- salvar persiste o registry inteiro de forma síncrona
- destruir apaga os artefatos do job antes de removê-lo e persistir
- nomes desconhecidos levantam NotFoundError sem mutação
"""

import pytest

from atlas_laundry.core.exceptions import NotFoundError
from atlas_laundry.core.jobs.lifecycle import destroy_job, get_job, list_jobs, open_job, save_job
from atlas_laundry.core.jobs.schedule import AfterJob, IntervalMinutes


def test_open_job_new_and_existing(ctx, add_job):
    add_job("fetch")

    job, existed = open_job(ctx, "Fetch")
    assert existed is True
    assert job is ctx.registry.get("fetch")

    fresh, existed = open_job(ctx, "New.Job")
    assert existed is False
    assert fresh.name == "new-job"
    assert "new-job" not in ctx.registry


def test_save_job_upserts_and_persists(ctx, store, make_job):
    save_job(ctx, make_job("a"))
    save_job(ctx, make_job("b"))
    save_job(ctx, make_job("A", schedule=IntervalMinutes(30)))

    assert ctx.registry.names() == ["a", "b"]
    assert len(store.snapshots) == 3
    assert store.last_snapshot["a"]["schedule"] == 30


def test_get_job_unknown_raises(ctx):
    with pytest.raises(NotFoundError):
        get_job(ctx, "ghost")


def test_destroy_job_deletes_artifacts_and_persists(ctx, store, add_job):
    add_job("a")
    add_job("b")

    destroyed = destroy_job(ctx, "A")

    assert destroyed.name == "a"
    assert store.deleted == ["a"]
    assert ctx.registry.names() == ["b"]
    assert list(store.last_snapshot) == ["b"]
    assert ctx.events[-1]["message"] == "job destroyed"


def test_destroy_unknown_job_does_not_mutate(ctx, store, add_job):
    add_job("a")
    with pytest.raises(NotFoundError):
        destroy_job(ctx, "ghost")
    assert ctx.registry.names() == ["a"]
    assert store.snapshots == []
    assert store.deleted == []


def test_list_jobs_describes_schedules(ctx, add_job):
    add_job("a", schedule=IntervalMinutes(60))
    add_job("b", schedule=AfterJob("a"))

    listing = [(job.name, text) for job, text in list_jobs(ctx)]

    assert listing == [
        ("a", "runs every 60 minutes."),
        ("b", "runs after another job called a."),
    ]
