# src/atlas_laundry/core/jobs/schedule.py
"""
Agendas de jobs do Atlas Laundry.

Uma agenda é exatamente uma de quatro variantes:
    - Manual              → roda apenas quando pedido explicitamente
    - IntervalMinutes(n)  → roda a cada `n` minutos (n > 0)
    - DailyTime(h, m)     → roda uma vez por dia a partir de h:m
    - AfterJob(name)      → roda logo depois do job `name`

Representação persistida (valor discriminado):
    - None / ""           → Manual
    - int                 → IntervalMinutes
    - "HH:MM"             → DailyTime
    - qualquer outra str  → AfterJob

Decisões arquiteturais:
    - Variantes são dataclasses imutáveis; comparação por valor
    - `AfterJob` guarda apenas o nome; a existência do alvo não é validada
      na escrita (uma referência pendente é legal e nunca dispara)
    - `parse_schedule` é a validação da entrada do usuário; ela sim pode
      exigir que o alvo exista (`known_names`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from atlas_laundry.core.exceptions import ValidationError


@dataclass(frozen=True)
class Manual:
    pass


@dataclass(frozen=True)
class IntervalMinutes:
    minutes: int

    def __post_init__(self) -> None:
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int) or self.minutes <= 0:
            raise ValidationError(
                "Intervalo deve ser um inteiro positivo de minutos",
                details={"minutes": self.minutes},
            )


@dataclass(frozen=True)
class DailyTime:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValidationError(
                "Horário diário inválido",
                details={"hour": self.hour, "minute": self.minute},
                hint="Use HH:MM, como 9:30 ou 13:00.",
            )

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class AfterJob:
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("AfterJob exige o nome de um job", details={"name": self.name})

    def targets(self, job_name: str) -> bool:
        return self.name.lower() == job_name.lower()


Schedule = Union[Manual, IntervalMinutes, DailyTime, AfterJob]

MANUAL = Manual()


def _parse_daily(text: str) -> DailyTime:
    hour_s, _, minute_s = text.partition(":")
    try:
        hour, minute = int(hour_s.strip()), int(minute_s.strip())
    except ValueError:
        raise ValidationError(
            f"Horário diário inválido: {text!r}",
            details={"value": text},
            hint="Use HH:MM, como 9:30 ou 13:00.",
        ) from None
    return DailyTime(hour, minute)


def schedule_from_value(value: Any) -> Schedule:
    """Converte o valor persistido (discriminado) em uma variante de agenda."""
    if value is None:
        return MANUAL
    if isinstance(value, bool):
        raise ValidationError("Agenda persistida inválida", details={"value": value})
    if isinstance(value, int):
        return IntervalMinutes(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return MANUAL
        if ":" in text:
            return _parse_daily(text)
        return AfterJob(text)
    raise ValidationError(
        "Agenda persistida inválida",
        details={"value": repr(value), "type": type(value).__name__},
    )


def schedule_to_value(schedule: Schedule) -> Optional[Union[int, str]]:
    """Converte uma variante de agenda em seu valor persistido."""
    if isinstance(schedule, Manual):
        return None
    if isinstance(schedule, IntervalMinutes):
        return schedule.minutes
    if isinstance(schedule, DailyTime):
        return str(schedule)
    if isinstance(schedule, AfterJob):
        return schedule.name
    raise TypeError(f"Unknown schedule variant: {schedule!r}")


def parse_schedule(
    answer: str,
    *,
    job_name: str,
    known_names: Optional[Iterable[str]] = None,
) -> Schedule:
    """
    Valida a resposta do usuário para a agenda de um job.

    Regras:
        - vazio              → Manual
        - contém ':'         → DailyTime (validado)
        - inteiro            → IntervalMinutes (> 0)
        - outro texto        → AfterJob; com `known_names`, precisa nomear
          um job existente diferente do próprio job (o nome canônico é
          devolvido com sua caixa original)

    Raises:
        ValidationError: Se a resposta não corresponder a nenhuma regra.
    """
    text = (answer or "").strip()
    if not text:
        return MANUAL

    if ":" in text:
        return _parse_daily(text)

    try:
        minutes = int(text)
    except ValueError:
        pass
    else:
        return IntervalMinutes(minutes)

    wanted = text.lower()
    if wanted == job_name.lower():
        raise ValidationError(
            "Um job não pode rodar depois de si mesmo",
            details={"job": job_name},
        )
    if known_names is None:
        return AfterJob(text)
    for name in known_names:
        if name.lower() == wanted:
            return AfterJob(name)
    raise ValidationError(
        f"Não existe job chamado '{text}'",
        details={"job": job_name, "after": text},
        hint="Informe o nome de um job existente, um número de minutos ou um horário.",
    )


def describe_schedule(schedule: Schedule) -> str:
    if isinstance(schedule, IntervalMinutes):
        return f"runs every {schedule.minutes} minutes."
    if isinstance(schedule, DailyTime):
        return f"runs every day at {schedule}."
    if isinstance(schedule, AfterJob):
        return f"runs after another job called {schedule.name}."
    return "runs manually."
