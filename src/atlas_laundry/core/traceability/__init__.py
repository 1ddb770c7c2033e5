# src/atlas_laundry/core/traceability/__init__.py
"""
Pacote de rastreabilidade do Atlas Laundry: JobRunRecord v1.

API pública exposta:
    - JobRunRecord      → estrutura canônica do registro de uma tentativa
    - create_run_record → criação explícita do registro
    - add_event         → registro explícito de eventos no Event Log
    - record_finished   → consolida uma tentativa bem-sucedida
    - record_failed     → consolida uma tentativa falha ou pulada
    - save_run_record / load_run_record → persistência JSON
"""

from .run_record import (
    JobRunRecord,
    add_event,
    create_run_record,
    load_run_record,
    record_failed,
    record_finished,
    save_run_record,
)

__all__ = [
    "JobRunRecord",
    "add_event",
    "create_run_record",
    "load_run_record",
    "record_failed",
    "record_finished",
    "save_run_record",
]
