# tests/core/engine/test_chains.py
"""
Testes do resolvedor de cadeias "rodar depois de".

Os testes asseguram que:
- uma cadeia é expandida até o ponto fixo, seguidor logo após o alvo
- `all` parte de todas as raízes, na ordem do registry
- um job nunca aparece antes do job que ele segue
- referências pendentes viram raízes de `all`
- ciclos são detectados e viram CyclicScheduleError (nunca laço infinito)

Invariantes:
    - Cada job aparece no máximo uma vez na sequência
"""

import itertools

import pytest

from atlas_laundry.core.engine.chains import RUN_ALL, find_cycles, resolve_chain, root_jobs
from atlas_laundry.core.exceptions import CyclicScheduleError, NotFoundError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.schedule import MANUAL, AfterJob, DailyTime, IntervalMinutes


def _names(jobs):
    return [j.name for j in jobs]


def _chain_abc():
    return {
        "a": Job("a", schedule=MANUAL),
        "b": Job("b", schedule=AfterJob("a")),
        "c": Job("c", schedule=AfterJob("b")),
    }


@pytest.mark.parametrize("order", list(itertools.permutations("abc")))
def test_run_all_orders_chain_regardless_of_registry_order(order):
    jobs = _chain_abc()
    registry_order = [jobs[k] for k in order]
    assert _names(resolve_chain(registry_order, RUN_ALL)) == ["a", "b", "c"]


def test_single_request_expands_followers_only():
    jobs = list(_chain_abc().values())
    assert _names(resolve_chain(jobs, "b")) == ["b", "c"]
    assert _names(resolve_chain(jobs, "C")) == ["c"]


def test_run_all_keeps_independent_roots():
    jobs = [
        Job("x", schedule=MANUAL),
        Job("b", schedule=AfterJob("A")),
        Job("a", schedule=IntervalMinutes(60)),
    ]
    sequence = _names(resolve_chain(jobs, "all"))

    assert sorted(sequence) == ["a", "b", "x"]
    assert sequence.index("b") == sequence.index("a") + 1


def test_followers_are_inserted_right_after_their_target():
    jobs = [
        Job("root"),
        Job("first", schedule=AfterJob("root")),
        Job("second", schedule=AfterJob("root")),
        Job("grandchild", schedule=AfterJob("first")),
    ]
    sequence = _names(resolve_chain(jobs, "root"))

    # cada seguidor entra imediatamente após a posição atual do alvo
    assert sequence == ["root", "second", "first", "grandchild"]
    for job in jobs[1:]:
        assert sequence.index(job.name) > sequence.index(job.schedule.name)


def test_dangling_after_job_is_a_root_of_all():
    jobs = [Job("orphan", schedule=AfterJob("deleted")), Job("a", schedule=DailyTime(9, 0))]

    assert _names(root_jobs(jobs)) == ["orphan", "a"]
    assert _names(resolve_chain(jobs, RUN_ALL)) == ["orphan", "a"]


def test_each_job_appears_once():
    jobs = [Job("a")] + [Job(f"j{i}", schedule=AfterJob("a")) for i in range(5)]
    sequence = _names(resolve_chain(jobs, RUN_ALL))
    assert len(sequence) == len(set(sequence)) == 6


def test_unknown_request_raises_not_found():
    with pytest.raises(NotFoundError) as exc:
        resolve_chain([Job("a")], "ghost")
    assert exc.value.details["job"] == "ghost"


def test_empty_registry_run_all_is_empty():
    assert resolve_chain([], RUN_ALL) == []


# -----------------------------------------------------
# Ciclos
# -----------------------------------------------------

def test_find_cycles():
    jobs = [
        Job("a", schedule=AfterJob("b")),
        Job("b", schedule=AfterJob("a")),
        Job("solo", schedule=AfterJob("solo")),
        Job("free"),
        Job("tail", schedule=AfterJob("a")),
    ]
    cycles = find_cycles(jobs)

    assert sorted(sorted(c) for c in cycles) == [["a", "b"], ["solo"]]


def test_request_into_cycle_raises():
    jobs = [Job("a", schedule=AfterJob("b")), Job("b", schedule=AfterJob("a")), Job("x")]

    with pytest.raises(CyclicScheduleError) as exc:
        resolve_chain(jobs, "a")

    assert exc.value.decision_required is True
    assert sorted(exc.value.details["cycles"][0]) == ["a", "b"]


def test_run_all_with_any_cycle_raises():
    jobs = [Job("x"), Job("a", schedule=AfterJob("b")), Job("b", schedule=AfterJob("a"))]
    with pytest.raises(CyclicScheduleError):
        resolve_chain(jobs, RUN_ALL)


def test_request_outside_cycle_still_runs():
    jobs = [Job("x"), Job("a", schedule=AfterJob("b")), Job("b", schedule=AfterJob("a"))]
    assert _names(resolve_chain(jobs, "x")) == ["x"]
