# src/atlas_laundry/core/context.py
"""
Contexto explícito do scheduler.

Este módulo define o `SchedulerContext`, a estrutura passada a toda
operação do core. Ele substitui qualquer configuração global mutável e
consolida:
    - o registry de jobs (fonte da verdade em memória)
    - o catálogo de tipos de conectores
    - o store (contrato `load`/`save`) e seus artefatos por job
    - a configuração resolvida
    - o relógio (injetável para testes)
    - o log estruturado de eventos

Princípios fundamentais:
    - Nenhum estado global compartilhado
    - `load` e `save` são chamados explicitamente nas fronteiras do processo
      e pelo executor após cada job bem-sucedido
    - Logs são eventos estruturados, nunca strings livres

Invariantes:
    - Todo evento possui `job`, `level`, `message` e `timestamp`
    - Sem store, `save` e `load` são no-ops (modo em memória)

Limites explícitos:
    - Não executa jobs
    - Não decide ordem de execução
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from atlas_laundry.core.config.hashing import compute_config_hash
from atlas_laundry.core.connectors.catalog import ConnectorCatalog
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.registry import JobRegistry


class JobStoreLike(Protocol):
    """Contrato exigido do store: leitura/escrita síncronas e artefatos por job."""

    def load(self, catalog: ConnectorCatalog) -> List[Job]:
        ...

    def save(self, jobs: Sequence[Job]) -> None:
        ...

    def save_run_record(self, record: Any) -> None:
        ...

    def delete_artifacts(self, job_name: str) -> None:
        ...


def local_now() -> datetime:
    """Instante atual, timezone-aware no fuso local (agendas diárias usam hora local)."""
    return datetime.now(timezone.utc).astimezone()


@dataclass
class SchedulerContext:
    catalog: ConnectorCatalog
    registry: JobRegistry = field(default_factory=JobRegistry)
    store: Optional[JobStoreLike] = None
    config: Dict[str, Any] = field(default_factory=dict)
    clock: Callable[[], datetime] = local_now

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    def load(self) -> None:
        """Substitui o registry pelo conteúdo do store (PersistenceError propaga)."""
        if self.store is None:
            return
        self.registry.replace_all(self.store.load(self.catalog))

    def save(self) -> None:
        """Persiste o registry inteiro de forma síncrona (PersistenceError propaga)."""
        if self.store is None:
            return
        self.store.save(self.registry.list())

    def now(self) -> datetime:
        return self.clock()

    # -----------------------------
    # Configuração
    # -----------------------------
    @property
    def config_hash(self) -> str:
        return compute_config_hash(self.config or {})

    @property
    def persist_run_records(self) -> bool:
        scheduler_cfg = (self.config or {}).get("scheduler", {}) or {}
        return bool(scheduler_cfg.get("persist_run_records", True))

    # -----------------------------
    # Logging
    # -----------------------------
    def _utc_now(self) -> datetime:
        now = self.now()
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    def log(self, *, job: Optional[str], level: str, message: str, **extra: Any) -> Dict[str, Any]:
        event = {
            "job": job,
            "level": level,
            "message": message,
            "timestamp": self._utc_now().isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        return event

    def drain_events(self) -> List[Dict[str, Any]]:
        drained, self.events = self.events, []
        return drained
