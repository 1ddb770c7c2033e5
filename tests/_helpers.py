# tests/_helpers.py
"""
Conectores dummy, relógio controlável e store em memória usados pelos testes.

Mantidos fora do conftest para que módulos de teste possam importá-los
(ex.: para estender `RecordingConnector`).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Dict, List, Mapping, MutableMapping, Optional, Sequence

from atlas_laundry.core.connectors.base import (
    Capability,
    Connector,
    Setting,
    SupportsAuthorization,
    SupportsInput,
    SupportsOutput,
)
from atlas_laundry.core.connectors.catalog import ConnectorCatalog
from atlas_laundry.core.exceptions import ConnectorError, PersistenceError
from atlas_laundry.core.jobs.job import Job

FIXED_NOW = datetime(2026, 1, 16, 10, 0, 0, tzinfo=timezone.utc)


# =====================================================
# Conectores dummy
# =====================================================

def _settings(*names: str):
    return tuple(Setting(name=n, prompt=f"{n}?") for n in names)


class RecordingConnector(Connector, SupportsInput, SupportsOutput):
    """Conector que devolve `items` no fetch e registra cada push."""

    input_capability: ClassVar[Capability] = Capability("Read from memory.", ())
    output_capability: ClassVar[Capability] = Capability("Write to memory.", ())

    def __init__(self, items: Optional[List[Any]] = None):
        self.items = list(items if items is not None else ["a", "b"])
        self.fetched: List[Dict[str, Any]] = []
        self.pushed: List[List[Any]] = []

    def fetch(self, settings: Mapping[str, Any]) -> List[Any]:
        self.fetched.append(dict(settings))
        return list(self.items)

    def push(self, items: Sequence[Any], settings: Mapping[str, Any]) -> None:
        self.pushed.append(list(items))


class Service(RecordingConnector):
    type_id = "Service"
    input_capability = Capability("Service base.", _settings("account"))
    output_capability = Capability("Service base.", _settings("account"))


class ServiceSub(Service):
    type_id = "Service.Sub"
    parent_type_id = "Service"
    input_capability = Capability("Service sub base.", _settings("account", "region"))
    output_capability = Capability("Service sub base.", _settings("account", "region"))


class ServiceSubA(ServiceSub):
    type_id = "Service.Sub.A"
    parent_type_id = "Service.Sub"
    name = "Service/A"
    input_capability = Capability("Read A.", _settings("account", "region", "playlist"))
    output_capability = Capability("Write A.", _settings("account", "region", "playlist"))


class ServiceSubB(ServiceSub):
    type_id = "Service.Sub.B"
    parent_type_id = "Service.Sub"
    name = "Service/B"
    input_capability = Capability("Read B.", _settings("account", "region", "folder"))
    output_capability = Capability("Write B.", _settings("account", "region", "folder"))


class Memory(RecordingConnector):
    type_id = "Memory"
    name = "Memory"
    input_capability = Capability("Read from memory.", _settings("bucket"))
    output_capability = Capability("Write to memory.", _settings("bucket"))


class Broken(RecordingConnector):
    type_id = "Broken"
    name = "Broken"

    def fetch(self, settings: Mapping[str, Any]) -> List[Any]:
        raise RuntimeError("boom")


class Guarded(RecordingConnector, SupportsAuthorization):
    """Exige autorização: token `revoked` falha, qualquer outro é renovado."""

    type_id = "Guarded"
    name = "Guarded"

    def authorize(self, settings: MutableMapping[str, Any]) -> None:
        if settings.get("token") == "revoked":
            raise ConnectorError("Token revogado", details={"type_id": self.type_id})
        settings["token"] = "fresh"


class Sink(Connector, SupportsOutput):
    """Conector somente de saída."""

    type_id = "Sink"
    name = "Sink"
    output_capability = Capability("Write only.", ())

    def push(self, items: Sequence[Any], settings: Mapping[str, Any]) -> None:
        return None


# =====================================================
# Relógio e store em memória
# =====================================================

class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class MemoryStore:
    """Store em memória com o mesmo contrato do JobStore."""

    def __init__(self, jobs: Optional[List[Job]] = None):
        self.jobs: List[Job] = list(jobs or [])
        self.snapshots: List[List[Dict[str, Any]]] = []
        self.records: List[Any] = []
        self.deleted: List[str] = []
        self.fail_saves = False

    def load(self, catalog: ConnectorCatalog) -> List[Job]:
        return list(self.jobs)

    def save(self, jobs: Sequence[Job]) -> None:
        if self.fail_saves:
            raise PersistenceError(
                "Falha ao persistir o registro de jobs",
                details={"path": "memory", "operation": "save"},
            )
        self.snapshots.append([job.to_dict() for job in jobs])

    @property
    def last_snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {item["name"]: item for item in (self.snapshots[-1] if self.snapshots else [])}

    def save_run_record(self, record: Any) -> None:
        self.records.append(record)

    def delete_artifacts(self, job_name: str) -> None:
        self.deleted.append(job_name)


