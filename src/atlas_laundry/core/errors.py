"""
Atlas Laundry: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Laundry.
Erros são artefatos de domínio e fazem parte do contrato operacional
do scheduler, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    ConnectorError,
    CyclicScheduleError,
    JobConfigurationError,
    LaundryException,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LaundryErrorPayload:
    """
    Payload canônico de erro do Atlas Laundry.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica se o job está bloqueado aguardando decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Definição de jobs
JOB_VALIDATION_ERROR = "JOB_VALIDATION_ERROR"
JOB_NOT_FOUND = "JOB_NOT_FOUND"
JOB_CONFIGURATION_ERROR = "JOB_CONFIGURATION_ERROR"
CYCLIC_SCHEDULE = "CYCLIC_SCHEDULE"

# Execução
CONNECTOR_ERROR = "CONNECTOR_ERROR"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"

_CODES = {
    ValidationError: JOB_VALIDATION_ERROR,
    NotFoundError: JOB_NOT_FOUND,
    JobConfigurationError: JOB_CONFIGURATION_ERROR,
    CyclicScheduleError: CYCLIC_SCHEDULE,
    ConnectorError: CONNECTOR_ERROR,
    PersistenceError: PERSISTENCE_ERROR,
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def connector_error(
    *,
    job: str,
    phase: str,
    connector: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique as credenciais e os settings do conector. O próximo run tentará novamente.",
) -> LaundryErrorPayload:
    return LaundryErrorPayload(
        type=CONNECTOR_ERROR,
        message=f"Falha na fase '{phase}' do job",
        details={
            "job": job,
            "phase": phase,
            "connector": connector,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
        decision_required=False,
    )


def persistence_error(
    *,
    path: Optional[str] = None,
    operation: str = "save",
    exc_message: Optional[str] = None,
    hint: str = "Verifique permissões e espaço em disco. O progresso em memória não está durável.",
) -> LaundryErrorPayload:
    return LaundryErrorPayload(
        type=PERSISTENCE_ERROR,
        message="Falha ao persistir o registro de jobs",
        details={"path": path, "operation": operation, "exc_message": exc_message},
        hint=hint,
        decision_required=False,
    )


def exception_to_error(exc: BaseException) -> LaundryErrorPayload:
    """Converte exceções em LaundryErrorPayload (serializável, acionável).

    Regras:
    - LaundryException: já vem com message/details/hint/decision_required.
    - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, LaundryException):
        code = ENGINE_EXECUTION_ERROR
        for cls, candidate in _CODES.items():
            if isinstance(exc, cls):
                code = candidate
                break
        return LaundryErrorPayload(
            type=code,
            message=exc.message or "Erro de execução",
            details=dict(exc.details or {}),
            hint=exc.hint,
            decision_required=bool(exc.decision_required),
        )

    return LaundryErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log de eventos e a configuração do job",
        decision_required=False,
    )
