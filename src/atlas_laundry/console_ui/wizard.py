# src/atlas_laundry/console_ui/wizard.py
"""
Wizard interativo de criação/edição de jobs (Console UI Adapter v1).

Fluxo:
    1. Normaliza o nome; um job existente é editado no lugar
    2. Escolhe o conector de entrada (pergunta até receber um nome válido)
    3. Em um vínculo novo, herda settings de jobs aparentados; configura os campos
    4. Idem para o conector de saída
    5. Define a agenda (pergunta até receber uma resposta válida)
    6. Salva o job (upsert + persistência)

Limites explícitos:
- I/O é injetado (`ask`, `say`); o wizard não conhece click nem rich
- Não executa jobs
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from atlas_laundry.core.connectors.base import INPUT, OUTPUT, Connector, ConnectorInstance
from atlas_laundry.core.context import SchedulerContext
from atlas_laundry.core.exceptions import ValidationError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.lifecycle import open_job, save_job
from atlas_laundry.core.jobs.schedule import (
    AfterJob,
    DailyTime,
    IntervalMinutes,
    Schedule,
    parse_schedule,
    schedule_to_value,
)
from atlas_laundry.core.settings.entry import INVALID_ANSWER, clean_answer, configure_instance
from atlas_laundry.core.settings.inheritance import apply_inherited_settings, inherit_settings

Ask = Callable[[str, str], str]
Say = Callable[[str], None]

SCHEDULE_HELP = (
    "Now to set when this job will run.\n"
    "- Leave blank to run only when 'laundry run [job]' is called.\n"
    "- Enter a number to run after so many minutes. Entering 60 will run the job every hour.\n"
    "- Enter a time to run at a certain time every day, like '9:30' or '13:00'.\n"
    "- Enter the name of another job to run after that job runs.\n"
)

_CONNECTOR_TEXT = {
    INPUT: {
        "intro": "Now to decide where to launder data from. The sources we have are:",
        "question": "Which source do you want to use?",
        "confirm": "Cool, we'll start with {name}.",
    },
    OUTPUT: {
        "intro": "Now to decide where to send data to. The options we have are:",
        "question": "Which target do you want to use?",
        "confirm": "Cool, we'll send it to {name}.",
    },
}


def describe_choice(schedule: Schedule) -> str:
    if isinstance(schedule, IntervalMinutes):
        return f"This job will run every {schedule.minutes} minutes."
    if isinstance(schedule, DailyTime):
        return f"This job will run every day at {schedule}."
    if isinstance(schedule, AfterJob):
        return f"This job will run after the job {schedule.name}."
    return "This job will only be run manually."


class JobWizard:
    """Conduz a criação/edição de um job sobre um SchedulerContext."""

    def __init__(self, ctx: SchedulerContext, ask: Ask, say: Say):
        self.ctx = ctx
        self.ask = ask
        self.say = say

    def run(self, raw_name: str) -> Job:
        job, existed = open_job(self.ctx, raw_name)
        if existed:
            self.say(f"There's already a job called {job.name}, so we'll edit it.")
        else:
            self.say(f"Great, let's create a new job called {job.name}.")

        for mode in (INPUT, OUTPUT):
            instance, rebound = self.choose_connector(job, mode)
            # só um vínculo novo herda settings de jobs aparentados
            if rebound:
                inherited = inherit_settings(
                    self.ctx.catalog,
                    self.ctx.registry.list(),
                    instance.connector,
                    mode,
                    exclude=job.name,
                )
                apply_inherited_settings(instance, inherited)
            configure_instance(job, instance, self.ask, self.say)

        job.schedule = self.choose_schedule(job)
        save_job(self.ctx, job)
        self.say(f"Cool, the job {job.name} is all set up!")
        return job

    def choose_connector(self, job: Job, mode: str) -> Tuple[ConnectorInstance, bool]:
        """Escolhe o conector do modo. Retorna a instância e se ela foi recém-ligada."""
        text = _CONNECTOR_TEXT[mode]
        available = self.ctx.catalog.available(mode)
        listing = "\n".join(f"{c.name} - {c.capability(mode).description}" for c in available)
        self.say(f"{text['intro']}\n{listing}")

        current = job.connector(mode)
        chosen: Optional[Connector] = None
        while chosen is None:
            answer = clean_answer(self.ask(text["question"], current.name if current else ""))
            chosen = self.ctx.catalog.find_selectable(answer, mode)
            if chosen is None:
                self.say("Hm, couldn't find that one. Try again?")

        self.say(text["confirm"].format(name=chosen.name))
        rebound = current is None or current.type_id != chosen.type_id
        if rebound:
            job.bind(ConnectorInstance(chosen, mode))
        return job.connector(mode), rebound

    def choose_schedule(self, job: Job) -> Schedule:
        self.say(SCHEDULE_HELP)
        current = schedule_to_value(job.schedule)
        default = "" if current is None else str(current)
        known = [n for n in self.ctx.registry.names() if n.lower() != job.key]
        while True:
            answer = clean_answer(self.ask("How do you want the job to be scheduled?", default))
            try:
                schedule = parse_schedule(answer, job_name=job.name, known_names=known)
            except ValidationError as exc:
                self.say(exc.message or INVALID_ANSWER)
                continue
            self.say(describe_choice(schedule))
            return schedule
