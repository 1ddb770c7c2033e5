"""Command line interface for atlas-laundry (`laundry`)."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from atlas_laundry import __version__
from atlas_laundry.connectors import default_catalog
from atlas_laundry.core.config import ConfigError, load_config
from atlas_laundry.core.context import SchedulerContext
from atlas_laundry.core.engine.chains import RUN_ALL
from atlas_laundry.core.engine.executor import BatchResult
from atlas_laundry.core.engine.scheduler import Scheduler
from atlas_laundry.core.exceptions import LaundryException
from atlas_laundry.core.jobs.lifecycle import destroy_job, get_job, list_jobs
from atlas_laundry.core.jobs.job import sanitize_job_name
from atlas_laundry.persistence.job_store import JobStore

from .renderers import render_batch, render_event, render_job_list
from .wizard import JobWizard

console = Console()
error_console = Console(stderr=True)

DEFAULT_CONFIG = "~/.laundry/config.yaml"

_LEVEL_STYLE = {"error": "red", "warning": "yellow", "info": "dim"}


def build_context(config_path: str, local_config: Optional[str]) -> SchedulerContext:
    config = load_config(defaults_path=config_path, local_path=local_config)
    ctx = SchedulerContext(
        catalog=default_catalog(),
        store=JobStore.from_config(config),
        config=config,
    )
    ctx.load()
    return ctx


def _fail(message: str, hint: Optional[str] = None) -> None:
    error_console.print(f"[red]{escape(message)}[/red]")
    if hint:
        error_console.print(f"[dim]{escape(hint)}[/dim]")
    sys.exit(1)


def _ctx(click_ctx: click.Context) -> SchedulerContext:
    return click_ctx.obj["context"]


def _print_events(ctx: SchedulerContext, verbose: bool) -> None:
    for event in ctx.drain_events():
        level = str(event.get("level", "info"))
        if level == "info" and not verbose:
            continue
        style = _LEVEL_STYLE.get(level, "")
        console.print(escape(render_event(event)), style=style)


def _ask(prompt: str, default: str) -> str:
    return click.prompt(prompt, default=default, show_default=bool(default))


def _say(text: str) -> None:
    console.print(escape(text))


def _finish_batch(ctx: SchedulerContext, batch: BatchResult, verbose: bool) -> None:
    _print_events(ctx, verbose)
    console.print(escape(render_batch(batch)))
    if batch.persistence_errors:
        error_console.print("[yellow]Some results were not persisted.[/yellow]")
    if not batch.ok:
        sys.exit(1)


@click.group("laundry")
@click.option(
    "--config",
    "config_path",
    envvar="LAUNDRY_CONFIG",
    default=DEFAULT_CONFIG,
    show_default=True,
    help="Defaults configuration file (YAML or JSON).",
)
@click.option(
    "--local-config",
    envvar="LAUNDRY_LOCAL_CONFIG",
    default=None,
    help="Optional local overrides file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show informational events.")
@click.version_option(__version__, prog_name="laundry")
@click.pass_context
def cli(click_ctx: click.Context, config_path: str, local_config: Optional[str], verbose: bool):
    """Schedule jobs that move items from one connector to another."""
    try:
        context = build_context(config_path, local_config)
    except ConfigError as e:
        _fail(str(e), "Pass --config with a file that sets store.path.")
    except LaundryException as e:
        _fail(e.message, e.hint)
    click_ctx.obj = {"context": context, "verbose": verbose}


@cli.command("create")
@click.argument("job", required=False)
@click.pass_context
def create(click_ctx: click.Context, job: Optional[str]):
    """Create a job, or edit it if it already exists."""
    ctx = _ctx(click_ctx)
    if not job:
        console.print("Specify a name for the job with [bold]laundry create \\[job][/bold].")
        console.print(escape(render_job_list(list_jobs(ctx))))
        return
    try:
        JobWizard(ctx, _ask, _say).run(job)
    except LaundryException as e:
        _fail(e.message, e.hint)
    _print_events(ctx, click_ctx.obj["verbose"])


@cli.command("edit")
@click.argument("job", required=False)
@click.pass_context
def edit(click_ctx: click.Context, job: Optional[str]):
    """Edit an existing job."""
    ctx = _ctx(click_ctx)
    if not job:
        console.print("Specify a job to edit with [bold]laundry edit \\[job][/bold].")
        console.print(escape(render_job_list(list_jobs(ctx))))
        return
    try:
        get_job(ctx, job)
        JobWizard(ctx, _ask, _say).run(job)
    except LaundryException as e:
        _fail(e.message, e.hint)
    _print_events(ctx, click_ctx.obj["verbose"])


@cli.command("run")
@click.argument("job", required=False)
@click.pass_context
def run(click_ctx: click.Context, job: Optional[str]):
    """Run a job and every job chained after it ('all' runs every chain)."""
    ctx = _ctx(click_ctx)
    if not job:
        console.print("Specify a job to run with [bold]laundry run \\[job][/bold].")
        console.print(escape(render_job_list(list_jobs(ctx))))
        return
    scheduler = Scheduler(ctx)
    try:
        if job.strip().lower() == RUN_ALL:
            batch = scheduler.run_all()
        else:
            batch = scheduler.run_one(job)
    except LaundryException as e:
        _fail(e.message, e.hint)
    _finish_batch(ctx, batch, click_ctx.obj["verbose"])


@cli.command("tick")
@click.pass_context
def tick(click_ctx: click.Context):
    """Run every job whose schedule is due now."""
    ctx = _ctx(click_ctx)
    batch = Scheduler(ctx).tick()
    _finish_batch(ctx, batch, click_ctx.obj["verbose"])


@cli.command("destroy")
@click.argument("job", required=False)
@click.pass_context
def destroy(click_ctx: click.Context, job: Optional[str]):
    """Delete a job and the artifacts it owns."""
    ctx = _ctx(click_ctx)
    if not job:
        console.print("Specify a job to destroy with [bold]laundry destroy \\[job][/bold].")
        console.print(escape(render_job_list(list_jobs(ctx))))
        return
    try:
        found = get_job(ctx, job)
    except LaundryException as e:
        console.print(escape(render_job_list(list_jobs(ctx))))
        _fail(e.message, e.hint)

    answer = click.prompt(
        f"Are you sure you want to destroy the job {found.name}? Enter the job name again to confirm",
        default="",
        show_default=False,
    )
    try:
        confirmed = sanitize_job_name(answer) == found.name
    except LaundryException:
        confirmed = False
    if not confirmed:
        console.print(f"[green]Job [bold]{escape(found.name)}[/bold] saved.[/green]")
        return

    try:
        destroy_job(ctx, found.name)
    except LaundryException as e:
        _fail(e.message, e.hint)
    _print_events(ctx, click_ctx.obj["verbose"])
    console.print(f"[red]Job [bold]{escape(found.name)}[/bold] destroyed.[/red]")


@cli.command("list")
@click.pass_context
def list_command(click_ctx: click.Context):
    """List the configured jobs and their schedules."""
    console.print(escape(render_job_list(list_jobs(_ctx(click_ctx)))))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
