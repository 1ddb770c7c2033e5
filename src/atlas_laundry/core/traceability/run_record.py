# src/atlas_laundry/core/traceability/run_record.py
"""
JobRunRecord v1: rastreabilidade forense de cada tentativa de job.

O registro consolida, de forma determinística e auditável:
    - metadados da tentativa (run_id do lote, job, início, versão)
    - identidade das entradas (hash da configuração, tipos de conectores)
    - resultado final (status, fase, resumo, itens, duração)
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - A ordem do Event Log reflete a ordem real de execução
    - O registro é serializável e reconstruível (round-trip JSON)

Decisões arquiteturais:
    - UTC é o timezone canônico dos timestamps gravados
    - O registro fica no diretório de artefatos do job e é apagado junto
      com ele quando o job é destruído

Limites explícitos:
    - Não executa jobs
    - Não decide políticas de execução
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza um timestamp para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class JobRunRecord:
    """
    Registro forense de uma tentativa de execução de job.

    Campos principais:
        - run: run_id, job, started_at, laundry_version
        - inputs: config_hash, input_type, output_type
        - result: status, phase, summary, items, finished_at, duration_ms
        - events: Event Log ordenado
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    result: Dict[str, Any] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def job(self) -> str:
        return str(self.run.get("job", ""))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "result": dict(self.result),
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobRunRecord":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            result=dict(data.get("result", {}) or {}),
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_run_record(
    *,
    run_id: str,
    job: str,
    started_at: datetime,
    laundry_version: str,
    config_hash: str,
    input_type: Optional[str] = None,
    output_type: Optional[str] = None,
) -> JobRunRecord:
    """
    Cria o registro inicial de uma tentativa.

    ⚠️ Não emite eventos implicitamente: o Event Log inicia vazio.
    """
    return JobRunRecord(
        run={
            "run_id": run_id,
            "job": job,
            "started_at": _iso(started_at),
            "laundry_version": laundry_version,
        },
        inputs={
            "config_hash": config_hash,
            "input_type": input_type,
            "output_type": output_type,
        },
        result={},
        events=[],
    )


def add_event(
    record: JobRunRecord,
    *,
    event_type: str,
    ts: datetime,
    phase: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """Adiciona um evento explícito ao Event Log, preservando a ordem de chamada."""
    event: Dict[str, Any] = {
        "event_type": event_type,
        "timestamp": _iso(ts),
    }
    if phase is not None:
        event["phase"] = phase
    if payload:
        event["payload"] = dict(payload)
    record.events.append(event)


def _finish(
    record: JobRunRecord,
    *,
    status: str,
    ts: datetime,
    summary: str,
    phase: Optional[str],
    items: int,
    error: Optional[Dict[str, Any]],
) -> None:
    started = datetime.fromisoformat(record.run["started_at"])
    record.result = {
        "status": status,
        "phase": phase,
        "summary": summary,
        "items": int(items),
        "finished_at": _iso(ts),
        "duration_ms": _ms_between(started, ts),
    }
    if error is not None:
        record.result["error"] = dict(error)


def record_finished(
    record: JobRunRecord,
    *,
    ts: datetime,
    items: int,
    summary: str = "job complete",
) -> None:
    _finish(record, status="success", ts=ts, summary=summary, phase=None, items=items, error=None)
    add_event(record, event_type="job_finished", ts=ts, payload={"items": int(items)})


def record_failed(
    record: JobRunRecord,
    *,
    ts: datetime,
    status: str,
    phase: Optional[str],
    error: Dict[str, Any],
    items: int = 0,
) -> None:
    _finish(
        record,
        status=status,
        ts=ts,
        summary=str(error.get("message", "job failed")),
        phase=phase,
        items=items,
        error=error,
    )
    add_event(record, event_type="job_failed", ts=ts, phase=phase, payload={"error": dict(error)})


def save_run_record(record: JobRunRecord, path: Union[str, Path]) -> None:
    """Persiste o registro em JSON determinístico (UTF-8, chaves ordenadas)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(
        json.dumps(record.to_dict(), ensure_ascii=False, indent=2, sort_keys=True, default=str),
        encoding="utf-8",
    )


def load_run_record(path: Union[str, Path]) -> JobRunRecord:
    p = Path(path)
    return JobRunRecord.from_dict(json.loads(p.read_text(encoding="utf-8")))
