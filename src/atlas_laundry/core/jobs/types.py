# src/atlas_laundry/core/jobs/types.py
"""
Tipos canônicos de execução de jobs do Atlas Laundry.

Componentes principais:
    - JobStatus → enum de estados finais (SUCCESS, SKIPPED, FAILED)
    - JobPhase  → enum das fases do pipeline de um job
    - JobResult → estrutura imutável de resultado de uma tentativa

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Valores são projetados para persistência em JobRunRecord
    - Nenhuma lógica de execução vive neste módulo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class JobStatus(str, Enum):
    """
    Estados finais possíveis de uma tentativa de execução de job.

    Estados definidos:
        - SUCCESS: fetch e push concluídos; `last_run` avançado
        - SKIPPED: job não executado por erro de configuração (conector ausente)
        - FAILED: falha em authorize, fetch ou push

    Invariantes:
        - O status é um valor final, não transitório
        - O valor textual do enum é estável e canônico
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class JobPhase(str, Enum):
    """Fases do pipeline de um job, na ordem em que são executadas."""

    CONFIGURE = "configure"
    AUTHORIZE = "authorize"
    FETCH = "fetch"
    PUSH = "push"
    COMMIT = "commit"


@dataclass(frozen=True)
class JobResult:
    """
    Resultado imutável de uma tentativa de execução de job.

    Campos:
        - job: nome do job
        - status: estado final da tentativa
        - summary: resumo textual
        - phase: fase em que a falha ocorreu (None em sucesso)
        - items: quantidade de itens buscados/enviados
        - persisted: se o registro foi persistido após o sucesso
        - started_at / finished_at: instantes da tentativa
        - payload: dados adicionais (ex.: `error`, `persistence_error`)

    Invariantes:
        - Uma instância nunca é alterada após criada
        - `phase` só é preenchida quando status != SUCCESS
    """

    job: str
    status: JobStatus
    summary: str
    phase: Optional[JobPhase] = None
    items: int = 0
    persisted: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    warnings: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == JobStatus.SUCCESS
