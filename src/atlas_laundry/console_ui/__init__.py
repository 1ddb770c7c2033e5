"""Adapter de console do Atlas Laundry (wizard, renderizadores e CLI `laundry`)."""

from .renderers import (
    NO_JOBS,
    render_batch,
    render_event,
    render_events,
    render_job_list,
    render_result,
)
from .wizard import JobWizard

__all__ = [
    "NO_JOBS",
    "JobWizard",
    "render_batch",
    "render_event",
    "render_events",
    "render_job_list",
    "render_result",
]
