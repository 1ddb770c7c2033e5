"""Store canônica do registro de jobs (v1).

No Atlas Laundry, o registro de jobs deve ser persistido de forma
**explícita** e **síncrona**, garantindo:

- ordem de registro preservada no round-trip
- nenhuma escrita parcial visível (arquivo temporário + os.replace)
- artefatos por job isolados e apagados junto com o job

Decisões (v1):
- Formato escolhido pela extensão: YAML (`.yaml`/`.yml`) ou JSON (`.json`)
- Raiz do arquivo: `{"version": 1, "jobs": [...]}`
- Artefatos: `<artifacts_dir>/<job>/`; registros de execução em
  `runs/<run_id>.json` e uma cópia do mais recente em `latest.json`
- Arquivo de jobs ausente equivale a um registro vazio

Limites explícitos:
- Não valida alvos de `AfterJob` (referências pendentes são legais)
- Não executa jobs
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml  # PyYAML

from atlas_laundry.core.config.errors import ConfigError
from atlas_laundry.core.connectors.base import INPUT, OUTPUT, ConnectorInstance
from atlas_laundry.core.connectors.catalog import ConnectorCatalog
from atlas_laundry.core.exceptions import PersistenceError, ValidationError
from atlas_laundry.core.jobs.job import Job
from atlas_laundry.core.jobs.schedule import schedule_from_value
from atlas_laundry.core.traceability.run_record import (
    JobRunRecord,
    load_run_record,
    save_run_record,
)

STORE_FORMAT_VERSION = 1

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


class JobStore:
    """Store canônica (v1) do registro de jobs e dos artefatos por job."""

    def __init__(
        self,
        path: Union[str, Path],
        *,
        artifacts_dir: Optional[Union[str, Path]] = None,
    ):
        self.path = Path(path).expanduser()
        suffix = self.path.suffix.lower()
        if suffix not in _YAML_SUFFIXES | _JSON_SUFFIXES:
            raise PersistenceError(
                f"Formato de store não suportado: {self.path.suffix or '(sem extensão)'}",
                details={"path": str(self.path)},
                hint="Use um arquivo .yaml, .yml ou .json em store.path.",
            )
        if artifacts_dir is None:
            self.artifacts_dir = self.path.parent / "artifacts"
        else:
            self.artifacts_dir = Path(artifacts_dir).expanduser()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "JobStore":
        """Cria a store a partir das chaves `store.path` e `store.artifacts_dir`."""
        store_cfg = (config or {}).get("store", {}) or {}
        path = store_cfg.get("path")
        if not path:
            raise ConfigError("Chave obrigatória ausente na configuração: store.path")
        return cls(path, artifacts_dir=store_cfg.get("artifacts_dir"))

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in _YAML_SUFFIXES

    # ------------------------------------------------------------------
    # Serialização
    # ------------------------------------------------------------------
    def _dumps(self, data: Dict[str, Any]) -> str:
        if self.is_yaml:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return json.dumps(data, ensure_ascii=False, indent=2)

    def _loads(self, text: str) -> Any:
        if self.is_yaml:
            return yaml.safe_load(text)
        return json.loads(text)

    def _instance_from_dict(
        self,
        catalog: ConnectorCatalog,
        data: Optional[Mapping[str, Any]],
        *,
        mode: str,
        job_name: str,
    ) -> Optional[ConnectorInstance]:
        if not data:
            return None
        type_id = data.get("type")
        connector = catalog.find(type_id) if type_id else None
        if connector is None:
            raise PersistenceError(
                f"Tipo de conector desconhecido no job '{job_name}': {type_id!r}",
                details={"path": str(self.path), "job": job_name, "mode": mode, "type": type_id},
                hint="Registre o conector no catálogo ou edite o job.",
            )
        if not connector.selectable:
            raise PersistenceError(
                f"Tipo de conector base não pode ser ligado a um job: {type_id!r}",
                details={"path": str(self.path), "job": job_name, "mode": mode, "type": type_id},
                hint="Edite o job e escolha um conector concreto.",
            )
        try:
            return ConnectorInstance(connector, mode, dict(data.get("settings", {}) or {}))
        except ValidationError as e:
            raise PersistenceError(
                e.message,
                details={"path": str(self.path), "job": job_name, **e.details},
                hint="Edite o arquivo de jobs ou recrie o job.",
            ) from e

    def _job_from_dict(self, catalog: ConnectorCatalog, data: Mapping[str, Any]) -> Job:
        raw_name = data.get("name")
        try:
            last_run = data.get("last_run")
            if last_run and not isinstance(last_run, datetime):
                last_run = datetime.fromisoformat(str(last_run))
            job = Job(
                name=raw_name,
                schedule=schedule_from_value(data.get("schedule")),
                last_run=last_run or None,
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Job inválido no store: {raw_name!r}",
                details={"path": str(self.path), "job": raw_name, "exc_message": str(e)},
                hint="Edite o arquivo de jobs ou recrie o job.",
            ) from e
        job.input = self._instance_from_dict(catalog, data.get("input"), mode=INPUT, job_name=job.name)
        job.output = self._instance_from_dict(catalog, data.get("output"), mode=OUTPUT, job_name=job.name)
        return job

    # ------------------------------------------------------------------
    # Load / Save
    # ------------------------------------------------------------------
    def load(self, catalog: ConnectorCatalog) -> List[Job]:
        """Carrega os jobs em ordem de registro (arquivo ausente → lista vazia)."""
        if not self.path.exists():
            return []
        try:
            data = self._loads(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise PersistenceError(
                "Falha ao ler o registro de jobs",
                details={"path": str(self.path), "operation": "load", "exc_message": str(e)},
                hint="Verifique o arquivo de jobs (formato e permissões).",
            ) from e

        if data is None:
            return []
        if not isinstance(data, dict) or not isinstance(data.get("jobs", []), list):
            raise PersistenceError(
                "Registro de jobs com estrutura inválida",
                details={"path": str(self.path), "operation": "load"},
                hint="A raiz deve ser um dicionário com a lista 'jobs'.",
            )
        return [self._job_from_dict(catalog, item or {}) for item in data.get("jobs", []) or []]

    def save(self, jobs: Sequence[Job]) -> None:
        """Grava o registro inteiro de forma atômica (temporário + os.replace)."""
        payload = {
            "version": STORE_FORMAT_VERSION,
            "jobs": [job.to_dict() for job in jobs],
        }
        text = self._dumps(payload)

        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise PersistenceError(
                "Falha ao persistir o registro de jobs",
                details={"path": str(self.path), "operation": "save", "exc_message": str(e)},
                hint="Verifique permissões e espaço em disco. O progresso em memória não está durável.",
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    # ------------------------------------------------------------------
    # Artefatos por job
    # ------------------------------------------------------------------
    def artifacts_path(self, job_name: str) -> Path:
        return self.artifacts_dir / job_name.lower()

    def save_run_record(self, record: JobRunRecord) -> Path:
        job_dir = self.artifacts_path(record.job)
        run_id = str(record.run.get("run_id", "unknown"))
        path = job_dir / "runs" / f"{run_id}.json"
        try:
            save_run_record(record, path)
            save_run_record(record, job_dir / "latest.json")
        except OSError as e:
            raise PersistenceError(
                "Falha ao gravar o registro de execução",
                details={"path": str(path), "operation": "save_run_record", "exc_message": str(e)},
            ) from e
        return path

    def load_run_record(self, job_name: str, run_id: Optional[str] = None) -> Optional[JobRunRecord]:
        """Carrega o registro de um run (ou o mais recente); None se não existir."""
        job_dir = self.artifacts_path(job_name)
        path = job_dir / "latest.json" if run_id is None else job_dir / "runs" / f"{run_id}.json"
        if not path.exists():
            return None
        return load_run_record(path)

    def delete_artifacts(self, job_name: str) -> None:
        job_dir = self.artifacts_path(job_name)
        if not job_dir.exists():
            return
        try:
            shutil.rmtree(job_dir)
        except OSError as e:
            raise PersistenceError(
                "Falha ao apagar os artefatos do job",
                details={"path": str(job_dir), "operation": "delete_artifacts", "exc_message": str(e)},
            ) from e
