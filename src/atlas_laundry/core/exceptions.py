"""
Atlas Laundry: Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Atlas Laundry.

Objetivo:
- Permitir que core, conectores e adapters levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para LaundryErrorPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras do scheduler

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- A mensagem é curta e humana; o stack trace nunca é embutido.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LaundryException(Exception):
    """Base class para exceções internas do Atlas Laundry.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Entrada do usuário / definição de jobs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationError(LaundryException):
    """Nome de job, agenda, valor de campo ou capacidade inválidos."""


@dataclass(frozen=True)
class NotFoundError(LaundryException):
    """Job desconhecido em um pedido de run/edit/destroy."""


@dataclass(frozen=True)
class CyclicScheduleError(LaundryException):
    """Ciclo entre agendas `AfterJob` (A roda depois de B que roda depois de A)."""


# ---------------------------------------------------------------------------
# Execução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JobConfigurationError(LaundryException):
    """Job sem conector de entrada ou de saída."""


@dataclass(frozen=True)
class ConnectorError(LaundryException):
    """Falha de authorize/fetch/push de um conector."""


@dataclass(frozen=True)
class PersistenceError(LaundryException):
    """Falha de leitura ou escrita no store de jobs."""
