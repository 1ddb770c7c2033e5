# src/atlas_laundry/core/connectors/catalog.py
"""
Catálogo estrutural de tipos de conectores.

Este módulo define o `ConnectorCatalog`, registro estático dos tipos de
conectores disponíveis, indexados por `type_id`, com o grafo explícito de
especialização (`parent_type_id`).

Responsabilidades do módulo:
    - Validar unicidade de `type_id`
    - Garantir que todo pai declarado esteja registrado antes do filho
    - Preservar a ordem de registro
    - Expor ancestrais e linhagem de um tipo seguindo o grafo

Invariantes:
    - Cada tipo registrado possui `type_id` único e não vazio
    - O grafo de tipos é acíclico (pais sempre registrados antes)

Limites explícitos:
    - Não executa conectores
    - Não conhece jobs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .base import Connector


class DuplicateConnectorTypeError(ValueError):
    """
    Exceção levantada ao registrar dois conectores com o mesmo `type_id`.

    A duplicidade é tratada como erro fatal de configuração do catálogo,
    no momento do registro.
    """


class UnknownParentTypeError(ValueError):
    """Exceção levantada quando `parent_type_id` não está registrado."""


@dataclass
class ConnectorCatalog:
    """
    Registro canônico de tipos de conectores.

    Decisões arquiteturais:
        - O pai precisa estar registrado antes do filho, o que torna o
          grafo acíclico por construção
        - A ordem de inserção é preservada separadamente
    """

    _types: Dict[str, Connector] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, connectors: Iterable[Connector]) -> "ConnectorCatalog":
        catalog = cls()
        for connector in connectors:
            catalog.register(connector)
        return catalog

    def register(self, connector: Connector) -> Connector:
        type_id = getattr(connector, "type_id", None)
        if not isinstance(type_id, str) or not type_id.strip():
            raise ValueError("connector.type_id must be a non-empty string")
        if type_id in self._types:
            raise DuplicateConnectorTypeError(f"Duplicate connector type: {type_id}")
        parent = connector.parent_type_id
        if parent is not None and parent not in self._types:
            raise UnknownParentTypeError(
                f"Connector '{type_id}' declares unknown parent '{parent}'"
            )
        self._types[type_id] = connector
        self._order.append(type_id)
        return connector

    def get(self, type_id: str) -> Connector:
        return self._types[type_id]

    def find(self, type_id: str) -> Optional[Connector]:
        return self._types.get(type_id)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def list(self) -> List[Connector]:
        return [self._types[t] for t in self._order]

    def ancestors(self, type_id: str) -> List[str]:
        """Ancestrais do tipo, do mais específico ao mais geral (sem o próprio tipo)."""
        chain: List[str] = []
        current = self._types.get(type_id)
        while current is not None and current.parent_type_id is not None:
            chain.append(current.parent_type_id)
            current = self._types.get(current.parent_type_id)
        return chain

    def lineage(self, type_id: str) -> List[str]:
        return [type_id] + self.ancestors(type_id)

    def available(self, mode: str) -> List[Connector]:
        """Conectores escolhíveis para o modo, ordenados por nome de exibição."""
        found = [c for c in self.list() if c.selectable and c.supports(mode)]
        return sorted(found, key=lambda c: c.name)

    def find_selectable(self, answer: str, mode: str) -> Optional[Connector]:
        """Resolve uma resposta do usuário (nome ou type_id, sem caixa) para um conector."""
        wanted = (answer or "").strip().lower()
        if not wanted:
            return None
        for connector in self.available(mode):
            if connector.name.lower() == wanted or connector.type_id.lower() == wanted:
                return connector
        return None
