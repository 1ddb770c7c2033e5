# src/atlas_laundry/core/connectors/__init__.py
"""
Contratos de conectores e catálogo de tipos do Atlas Laundry.

Este pacote define o que o core exige de um conector (capacidades
explícitas de entrada e saída, schema de settings, autorização opcional)
e o catálogo onde os tipos disponíveis são registrados.

Limites explícitos:
    - Não contém conectores concretos (ver `atlas_laundry.connectors`)
"""

from .base import (
    INPUT,
    MODES,
    OUTPUT,
    TOKEN_SETTING,
    Capability,
    Connector,
    ConnectorInstance,
    EntryDecision,
    Setting,
    SupportsAuthorization,
    SupportsInput,
    SupportsOutput,
)
from .catalog import ConnectorCatalog, DuplicateConnectorTypeError, UnknownParentTypeError

__all__ = [
    "INPUT",
    "MODES",
    "OUTPUT",
    "TOKEN_SETTING",
    "Capability",
    "Connector",
    "ConnectorCatalog",
    "ConnectorInstance",
    "DuplicateConnectorTypeError",
    "EntryDecision",
    "Setting",
    "SupportsAuthorization",
    "SupportsInput",
    "SupportsOutput",
    "UnknownParentTypeError",
]
