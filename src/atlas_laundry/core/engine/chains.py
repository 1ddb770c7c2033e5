# src/atlas_laundry/core/engine/chains.py
"""
Resolvedor de cadeias de dependência ("rodar depois de").

Este módulo transforma um pedido de execução (um nome de job ou `all`)
na sequência linear de jobs a executar, da frente para trás.

Regras:
    - Pedido de um job: a sequência começa pelo próprio job.
    - Pedido `all`: as raízes são os jobs cuja agenda não é um `AfterJob`
      apontando para um job existente (inclui Manual, intervalos, horários
      e `AfterJob` pendentes), na ordem do registry.
    - Expansão: varreduras completas sobre os jobs ainda não incluídos;
      um job cujo alvo `AfterJob` (sem caixa) já está na sequência é
      inserido logo após a posição atual desse alvo e marcado incluído na
      hora, de modo que a mesma varredura ainda pode encadear outros.
      Para quando uma varredura não encontra nenhum job novo.

Decisões arquiteturais:
    - Ciclos entre `AfterJob` são detectados antes da expansão e viram
      CyclicScheduleError; a expansão tem ainda um teto de varreduras
    - Um pedido `all` com qualquer ciclo no registry é rejeitado, pois os
      membros do ciclo nunca seriam alcançados

Invariantes:
    - Um job nunca aparece antes do job que ele segue
    - Cada job aparece no máximo uma vez

Limites explícitos:
    - Não executa jobs
    - Não avalia gatilhos de tempo
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from atlas_laundry.core.exceptions import CyclicScheduleError, NotFoundError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.schedule import AfterJob

RUN_ALL = "all"


def _predecessor(job: Job, by_key: Dict[str, Job]) -> Optional[Job]:
    schedule = job.schedule
    if isinstance(schedule, AfterJob):
        return by_key.get(schedule.name.lower())
    return None


def find_cycles(jobs: Iterable[Job]) -> List[List[str]]:
    """
    Lista os ciclos do grafo `AfterJob` (cada job tem no máximo um predecessor).

    Returns:
        List[List[str]]: nomes de cada ciclo, na ordem de encadeamento.
    """
    job_list = list(jobs)
    by_key = {j.key: j for j in job_list}
    cycles: List[List[str]] = []
    settled: Set[str] = set()

    for start in job_list:
        path: List[str] = []
        position: Dict[str, int] = {}
        current: Optional[Job] = start
        while current is not None and current.key not in settled:
            if current.key in position:
                cycles.append([by_key[k].name for k in path[position[current.key]:]])
                break
            position[current.key] = len(path)
            path.append(current.key)
            current = _predecessor(current, by_key)
        settled.update(path)

    return cycles


def _cycle_error(cycles: List[List[str]]) -> CyclicScheduleError:
    return CyclicScheduleError(
        "Agenda cíclica: jobs rodam um depois do outro em círculo",
        details={"cycles": cycles},
        hint="Troque a agenda de um dos jobs do ciclo para manual, intervalo ou horário.",
        decision_required=True,
    )


def root_jobs(jobs: Iterable[Job]) -> List[Job]:
    job_list = list(jobs)
    names = {j.key for j in job_list}
    return [
        j for j in job_list
        if not (isinstance(j.schedule, AfterJob) and j.schedule.name.lower() in names)
    ]


def expand_chain(jobs: Iterable[Job], roots: Iterable[Job]) -> List[Job]:
    """Expande as raízes até o ponto fixo, inserindo seguidores após seu alvo."""
    job_list = list(jobs)
    sequence: List[Job] = list(roots)
    included: Set[str] = {j.key for j in sequence}

    max_passes = len(job_list) + 1
    passes = 0
    found = True
    while found:
        passes += 1
        if passes > max_passes:
            raise _cycle_error(find_cycles(job_list))
        found = False
        for job in job_list:
            if job.key in included or not isinstance(job.schedule, AfterJob):
                continue
            target = job.schedule.name.lower()
            for index, queued in enumerate(sequence):
                if queued.key == target:
                    sequence.insert(index + 1, job)
                    included.add(job.key)
                    found = True
                    break

    return sequence


def resolve_chain(jobs: Iterable[Job], request: str) -> List[Job]:
    """
    Calcula a sequência de execução de um pedido.

    Args:
        jobs: jobs do registry, em ordem de registro.
        request: nome de um job (sem caixa) ou `RUN_ALL`.

    Returns:
        List[Job]: jobs na ordem em que devem rodar.

    Raises:
        NotFoundError: se o job pedido não existir.
        CyclicScheduleError: se o pedido alcançar um ciclo de `AfterJob`.
    """
    job_list = list(jobs)
    wanted = (request or "").strip().lower()
    cycles = find_cycles(job_list)

    if wanted == RUN_ALL:
        if cycles:
            raise _cycle_error(cycles)
        return expand_chain(job_list, root_jobs(job_list))

    root = next((j for j in job_list if j.key == wanted), None)
    if root is None:
        raise NotFoundError(
            f"Job '{request}' não encontrado",
            details={"job": request},
            hint="Use 'laundry list' para ver os jobs configurados.",
        )

    in_cycle = [c for c in cycles if root.name in c]
    if in_cycle:
        raise _cycle_error(in_cycle)

    return expand_chain(job_list, [root])
