# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Laundry.

Este módulo define fixtures reutilizáveis (sobre tests/_helpers.py) que fornecem:
- configurações mínimas e determinísticas
- uma família de conectores dummy com hierarquia explícita
  (Service → Service.Sub → Service.Sub.A / Service.Sub.B)
- conectores auxiliares (Memory, Broken, Guarded)
- um relógio controlável e um store em memória
- um SchedulerContext isolado

Decisões arquiteturais:
    - Conectores dummy registram chamadas em vez de fazer I/O
    - O relógio é injetado no contexto; nenhum teste depende da hora real
    - O store em memória guarda snapshots serializados (`Job.to_dict`)

Invariantes:
    - Nenhuma fixture acessa a rede
    - Cada teste recebe catálogo, store e contexto novos

Limites explícitos:
    - Não substituir testes de integração com o JobStore real
      (ver tests/persistence)
"""

from datetime import datetime
from typing import Any, Dict, Optional

import pytest

from atlas_laundry.core.connectors.base import ConnectorInstance
from atlas_laundry.core.connectors.catalog import ConnectorCatalog
from atlas_laundry.core.context import SchedulerContext
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.schedule import MANUAL

from tests._helpers import (
    FIXED_NOW,
    Broken,
    FakeClock,
    Guarded,
    Memory,
    MemoryStore,
    Service,
    ServiceSub,
    ServiceSubA,
    ServiceSubB,
    Sink,
)


# =====================================================
# Fixtures
# =====================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def catalog() -> ConnectorCatalog:
    """Catálogo com a família Service e os conectores auxiliares (bases antes das filhas)."""
    return ConnectorCatalog.of(
        [
            Service(),
            ServiceSub(),
            ServiceSubA(),
            ServiceSubB(),
            Memory(),
            Broken(),
            Guarded(),
            Sink(),
        ]
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def ctx(catalog, store, clock) -> SchedulerContext:
    return SchedulerContext(
        catalog=catalog,
        store=store,
        config={"scheduler": {"persist_run_records": True}},
        clock=clock,
    )


@pytest.fixture
def make_job(catalog):
    """
    Fábrica de jobs ligados a conectores do catálogo.

    Uso:
        make_job("a", schedule=IntervalMinutes(60), input_type="Memory")
        make_job("b", input_type=None)  # job sem conector de entrada
    """

    def _make(
        name: str,
        *,
        schedule=MANUAL,
        last_run: Optional[datetime] = None,
        input_type: Optional[str] = "Memory",
        output_type: Optional[str] = "Memory",
        input_settings: Optional[Dict[str, Any]] = None,
        output_settings: Optional[Dict[str, Any]] = None,
    ) -> Job:
        job = Job(name=name, schedule=schedule, last_run=last_run)
        if input_type is not None:
            job.input = ConnectorInstance(catalog.get(input_type), "input", dict(input_settings or {}))
        if output_type is not None:
            job.output = ConnectorInstance(catalog.get(output_type), "output", dict(output_settings or {}))
        return job

    return _make


@pytest.fixture
def add_job(ctx, make_job):
    """Cria um job com `make_job` e o registra no contexto (sem persistir)."""

    def _add(name: str, **kwargs: Any) -> Job:
        return ctx.registry.add(make_job(name, **kwargs))

    return _add


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """YAML de defaults semelhante a um `config.defaults.yaml` real."""
    return """\
store:
  path: ~/.laundry/jobs.yaml
scheduler:
  persist_run_records: true
connectors:
  file:
    encoding: utf-8
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas as chaves alteradas)."""
    return """\
store:
  artifacts_dir: /tmp/laundry-artifacts
scheduler:
  persist_run_records: false
"""
