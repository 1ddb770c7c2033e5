# src/atlas_laundry/core/jobs/registry.py
"""
Registro em memória dos jobs do Atlas Laundry.

O `JobRegistry` é a coleção ordenada de jobs e a fonte da verdade até a
próxima persistência. A ordem de registro é a ordem usada pelo
avaliador de gatilhos e pelo resolvedor de cadeias.

Decisões arquiteturais:
    - Nomes são comparados sem diferenciar caixa
    - `add` rejeita colisões; `upsert` edita no lugar (nunca duplica)
    - A ordem de inserção é mantida separadamente do índice

Invariantes:
    - Nunca existem dois jobs com nomes que colidem sem caixa
    - `list()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não persiste (responsabilidade do JobStore)
    - Não valida alvos de `AfterJob`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from atlas_laundry.core.exceptions import NotFoundError, ValidationError

from .job import Job


class DuplicateJobNameError(ValidationError):
    """Dois jobs com nomes iguais sem diferenciar caixa."""


@dataclass
class JobRegistry:
    _jobs: Dict[str, Job] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, jobs: Iterable[Job]) -> "JobRegistry":
        registry = cls()
        for job in jobs:
            registry.add(job)
        return registry

    def add(self, job: Job) -> Job:
        key = job.key
        if key in self._jobs:
            raise DuplicateJobNameError(
                f"Já existe um job chamado '{job.name}'",
                details={"job": job.name},
            )
        self._jobs[key] = job
        self._order.append(key)
        return job

    def upsert(self, job: Job) -> Job:
        """Insere o job ou substitui, na mesma posição, o job de mesmo nome."""
        key = job.key
        if key not in self._jobs:
            return self.add(job)
        self._jobs[key] = job
        return job

    def find(self, name: str) -> Optional[Job]:
        return self._jobs.get((name or "").strip().lower())

    def get(self, name: str) -> Job:
        job = self.find(name)
        if job is None:
            raise NotFoundError(
                f"Job '{name}' não encontrado",
                details={"job": name},
                hint="Use 'laundry list' para ver os jobs configurados.",
            )
        return job

    def remove(self, name: str) -> Job:
        job = self.get(name)
        del self._jobs[job.key]
        self._order.remove(job.key)
        return job

    def names(self) -> List[str]:
        return [self._jobs[k].name for k in self._order]

    def list(self) -> List[Job]:
        return [self._jobs[k] for k in self._order]

    def replace_all(self, jobs: Iterable[Job]) -> None:
        fresh = JobRegistry.of(jobs)
        self._jobs = fresh._jobs
        self._order = fresh._order

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[Job]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._order)
