# src/atlas_laundry/core/settings/inheritance.py
"""
Herança de settings entre jobs com conectores aparentados.

Quando um job é ligado a um tipo de conector, settings compartilhados
(em especial credenciais) são pré-preenchidos a partir de outros jobs que
já usam um conector da mesma família, para que o usuário não precise
informá-los de novo.

Algoritmo:
    1. Ancestrais do tipo escolhido, seguindo o grafo `parent_type_id`
       (do mais específico ao mais geral, sem o próprio tipo).
    2. Conjunto de nomes: `token` mais os settings, no mesmo modo, de cada
       ancestral registrado que suporta o modo.
    3. Jobs relacionados: jobs cujo conector no mesmo modo tem o tipo
       escolhido ou algum dos ancestrais em sua linhagem.
    4. Para cada job relacionado (ordem do registry), copiar os valores
       que ele possui; o último job vence.

Decisões arquiteturais:
    - Função pura: não altera jobs nem instâncias
    - Nomes que o conector alvo não aceita são descartados, preservando o
      invariante de settings declarados
    - Um tipo sem ancestrais não herda nada
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from atlas_laundry.core.connectors.base import TOKEN_SETTING, Connector, ConnectorInstance
from atlas_laundry.core.connectors.catalog import ConnectorCatalog
from atlas_laundry.core.jobs.job import Job


def inheritable_setting_names(catalog: ConnectorCatalog, connector: Connector, mode: str) -> List[str]:
    names = [TOKEN_SETTING]
    for ancestor_id in catalog.ancestors(connector.type_id):
        ancestor = catalog.find(ancestor_id)
        if ancestor is None or not ancestor.supports(mode):
            continue
        for name in ancestor.allowed_settings(mode):
            if name not in names:
                names.append(name)
    return names


def related_jobs(
    catalog: ConnectorCatalog,
    jobs: Iterable[Job],
    connector: Connector,
    mode: str,
    *,
    exclude: Optional[str] = None,
) -> List[Job]:
    family = set(catalog.ancestors(connector.type_id))
    if not family:
        return []
    excluded = exclude.lower() if exclude else None
    found: List[Job] = []
    for job in jobs:
        if excluded is not None and job.key == excluded:
            continue
        instance = job.connector(mode)
        if instance is None:
            continue
        if family.intersection(catalog.lineage(instance.type_id)):
            found.append(job)
    return found


def inherit_settings(
    catalog: ConnectorCatalog,
    jobs: Iterable[Job],
    connector: Connector,
    mode: str,
    *,
    exclude: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Calcula os valores herdados para um conector recém-escolhido.

    Args:
        catalog: catálogo de tipos (grafo de ancestrais).
        jobs: jobs existentes, na ordem do registry.
        connector: tipo escolhido para o novo vínculo.
        mode: "input" ou "output".
        exclude: nome do job sendo editado (não herda de si mesmo).

    Returns:
        Dict[str, Any]: setting → valor herdado (apenas settings aceitos pelo conector).
    """
    names = inheritable_setting_names(catalog, connector, mode)
    accepted = set(connector.allowed_settings(mode))
    inherited: Dict[str, Any] = {}
    for job in related_jobs(catalog, jobs, connector, mode, exclude=exclude):
        source = job.connector(mode)
        for name in names:
            if name in accepted and name in source.settings:
                inherited[name] = source.settings[name]
    return inherited


def apply_inherited_settings(instance: ConnectorInstance, inherited: Dict[str, Any]) -> ConnectorInstance:
    instance.update(inherited)
    return instance
