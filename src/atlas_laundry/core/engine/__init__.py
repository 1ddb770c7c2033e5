# src/atlas_laundry/core/engine/__init__.py
"""
Engine do Atlas Laundry.

Este pacote decide **quais** jobs rodam, **em que ordem** e **quando**,
e como a falha de um job afeta o lote.

Componentes principais:
    - chains    → expansão determinística das cadeias "rodar depois de"
    - triggers  → seleção dos jobs devidos em um instante
    - executor  → execução sequencial authorize/fetch/push com commit
    - scheduler → pontos de entrada run_one, run_all e tick

Invariantes:
    - Um job nunca roda antes do job que ele segue
    - Jobs rodam um de cada vez; o próximo só começa quando o anterior termina
    - `last_run` só avança após uma execução bem-sucedida

Limites explícitos:
    - Não define conectores concretos
    - Não depende de UI ou CLI
"""

from .chains import RUN_ALL, find_cycles, resolve_chain
from .executor import BatchResult, PipelineExecutor
from .scheduler import Scheduler
from .triggers import due_jobs, is_due

__all__ = [
    "RUN_ALL",
    "BatchResult",
    "PipelineExecutor",
    "Scheduler",
    "due_jobs",
    "find_cycles",
    "is_due",
    "resolve_chain",
]
