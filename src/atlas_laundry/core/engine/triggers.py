# src/atlas_laundry/core/engine/triggers.py
"""
Avaliador de gatilhos de tempo.

Seleciona os jobs cuja agenda *direta* dispara no instante `now`. Jobs
encadeados (`AfterJob`) nunca são selecionados aqui: eles rodam apenas
pela expansão da cadeia do job que seguem.

Regras:
    - IntervalMinutes(n): devido se nunca rodou, ou se os minutos inteiros
      decorridos desde `last_run` são ≥ n
    - DailyTime(h, m): devido se a hora do dia de `now` é ≥ h:m e (nunca
      rodou, ou os dias inteiros decorridos desde `last_run` são ≥ 1)
    - Manual e AfterJob: nunca devidos

Decisões arquiteturais:
    - Diferenças são truncadas em direção a zero (um `last_run` no futuro
      nunca torna um job devido)
    - Timestamps sem timezone são tratados como UTC nas diferenças
    - A hora do dia é lida de `now` como recebido (fuso do chamador)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.schedule import DailyTime, IntervalMinutes


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _elapsed_seconds(now: datetime, since: datetime) -> float:
    return (_ensure_tzaware_utc(now) - _ensure_tzaware_utc(since)).total_seconds()


def whole_minutes_between(since: datetime, now: datetime) -> int:
    return int(_elapsed_seconds(now, since) / 60)


def whole_days_between(since: datetime, now: datetime) -> int:
    return int(_elapsed_seconds(now, since) / 86400)


def is_due(job: Job, now: datetime) -> bool:
    schedule = job.schedule

    if isinstance(schedule, IntervalMinutes):
        if job.last_run is None:
            return True
        return whole_minutes_between(job.last_run, now) >= schedule.minutes

    if isinstance(schedule, DailyTime):
        if (now.hour, now.minute) < (schedule.hour, schedule.minute):
            return False
        if job.last_run is None:
            return True
        return whole_days_between(job.last_run, now) >= 1

    return False


def due_jobs(jobs: Iterable[Job], now: datetime) -> List[Job]:
    return [job for job in jobs if is_due(job, now)]
