# src/atlas_laundry/core/jobs/job.py
"""
Modelo canônico de Job do Atlas Laundry.

Um Job é um par nomeado (conector de entrada, conector de saída) mais uma
agenda e o instante do último run bem-sucedido.

Decisões arquiteturais:
    - O nome é normalizado na criação para um slug seguro para buckets
      (minúsculo, sem '.', '_' nem espaços, sem '-' nas pontas, ≤ 32 caracteres)
    - Comparação de nomes é sempre sem diferenciar caixa
    - `last_run` só é alterado pelo executor após um run bem-sucedido

Invariantes:
    - `input`, quando presente, está no modo de entrada (idem `output`)
    - O nome nunca é vazio nem a palavra reservada `all`
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from atlas_laundry.core.connectors.base import INPUT, OUTPUT, ConnectorInstance
from atlas_laundry.core.exceptions import JobConfigurationError, ValidationError

from .schedule import MANUAL, Schedule, schedule_to_value

MAX_NAME_LENGTH = 32
RESERVED_NAMES = frozenset({"all"})

_SEPARATORS = re.compile(r"[._\s]+")


def sanitize_job_name(raw: Any) -> str:
    """
    Normaliza um nome de job para um slug seguro (convenção de buckets S3).

    Raises:
        ValidationError: Se o resultado for vazio ou reservado.
    """
    name = "" if raw is None else str(raw)
    name = name.strip().lower()
    name = _SEPARATORS.sub("-", name)
    name = name.strip("-")
    name = name[:MAX_NAME_LENGTH].strip("-")
    if not name or name in RESERVED_NAMES:
        raise ValidationError(
            "Informe um nome válido para o job",
            details={"raw": None if raw is None else str(raw), "sanitized": name},
            hint="Use letras, números e '-'; 'all' é reservado.",
        )
    return name


@dataclass
class Job:
    name: str
    input: Optional[ConnectorInstance] = None
    output: Optional[ConnectorInstance] = None
    schedule: Schedule = MANUAL
    last_run: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.name = sanitize_job_name(self.name)
        self._check_mode(self.input, INPUT)
        self._check_mode(self.output, OUTPUT)

    @staticmethod
    def _check_mode(instance: Optional[ConnectorInstance], mode: str) -> None:
        if instance is not None and instance.mode != mode:
            raise ValidationError(
                f"Conector '{instance.type_id}' está ligado como {instance.mode}, esperado {mode}",
                details={"type_id": instance.type_id, "mode": instance.mode, "expected": mode},
            )

    @property
    def key(self) -> str:
        return self.name.lower()

    def connector(self, mode: str) -> Optional[ConnectorInstance]:
        if mode == INPUT:
            return self.input
        if mode == OUTPUT:
            return self.output
        raise ValueError(f"Unknown connector mode: {mode!r}")

    def bind(self, instance: ConnectorInstance) -> None:
        """Liga uma instância ao slot do seu modo, substituindo a anterior."""
        if instance.mode == INPUT:
            self.input = instance
        else:
            self.output = instance

    def missing_connectors(self) -> List[str]:
        return [mode for mode in (INPUT, OUTPUT) if self.connector(mode) is None]

    def check_connectors(self) -> None:
        """Falha com JobConfigurationError se faltar conector de entrada ou de saída."""
        missing = self.missing_connectors()
        if missing:
            raise JobConfigurationError(
                "Job sem conector de entrada ou de saída",
                details={"job": self.name, "missing": missing},
                hint="Edite o job e escolha os conectores ausentes antes de reexecutar.",
                decision_required=True,
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input": self.input.to_dict() if self.input is not None else None,
            "output": self.output.to_dict() if self.output is not None else None,
            "schedule": schedule_to_value(self.schedule),
            "last_run": self.last_run.isoformat() if self.last_run is not None else None,
        }
