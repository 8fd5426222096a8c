"""Command line interface: ``xstsync upload`` and ``xstsync get``."""

from __future__ import annotations

from typing import Any, Callable, Optional

import click

from xstsync.config import ConnectionInfo
from xstsync.errors import NetworkError, XstSyncError
from xstsync.manager import TransferManager
from xstsync.models import RunSummary, TransferOptions
from xstsync.plan import Phase, TransferPlan
from xstsync.summary import (
    EXIT_NETWORK,
    EXIT_NOTHING_MATCHED,
    EXIT_OK,
    EXIT_PREFLIGHT,
    exit_code,
    format_summary,
)
from xstsync.transfer import normalize_xml_boolean
from xstsync.util.log import configure_logging

_PHASE_TITLES = {
    Phase.CONFIG_COLLECTIONS: "Index configuration collections",
    Phase.CONFIG_RESOURCES: "Index configurations",
    Phase.COLLECTIONS: "Collections",
    Phase.RESOURCES: "Resources",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _xml_boolean(ctx, param, value):
    """Click callback: coerce true/yes/1 and false/no/0 to yes/no."""
    try:
        return normalize_xml_boolean(value)
    except XstSyncError as exc:
        raise click.BadParameter(str(exc))


def _manager(ctx) -> TransferManager:
    factory = ctx.obj.get("manager_factory")
    if factory is not None:
        return factory()

    config_path = ctx.obj.get("config_path")
    if config_path:
        connection = ConnectionInfo.from_file(config_path)
    else:
        connection = ConnectionInfo.from_env()
    return TransferManager(connection)


def _options(**kwargs: Any) -> TransferOptions:
    try:
        return TransferOptions(**kwargs)
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(str(exc))


def _print_plan(plan: TransferPlan) -> None:
    for phase, items in plan.phases():
        click.echo(f"\n{_PHASE_TITLES[phase]}:\n")
        for item in items:
            click.echo(item.display_path)


def _report(summary: RunSummary) -> int:
    for outcome in summary.failures:
        reason = outcome.error.message if outcome.error else "unknown error"
        click.echo(
            f"✘ {outcome.item.display_path} could not be transferred! Reason: {reason}",
            err=True,
        )
    if summary.nothing_matched:
        click.echo("nothing matched", err=True)
        return EXIT_NOTHING_MATCHED
    click.echo(format_summary(summary))
    return exit_code(summary)


def _run(ctx, action: Callable[[TransferManager], Optional[RunSummary]]) -> None:
    try:
        summary = action(_manager(ctx))
    except NetworkError as exc:
        reason = exc.code or str(exc)
        click.echo(f"Could not connect to DB! Reason: {reason}", err=True)
        ctx.exit(EXIT_NETWORK)
    except XstSyncError as exc:
        click.echo(str(exc), err=True)
        ctx.exit(EXIT_PREFLIGHT)

    ctx.exit(EXIT_OK if summary is None else _report(summary))


def _filter_options(f):
    f = click.option(
        "--exclude", "-e", multiple=True,
        help="Exclude any item matching one or more patterns (comma separated).",
    )(f)
    f = click.option(
        "--include", "-i", multiple=True,
        help='Include only items matching one or more patterns (comma separated). Default "**".',
    )(f)
    return f


def _pool_options(f):
    f = click.option(
        "--mintime", "-m", type=int, default=0, show_default=True,
        help="Minimum milliseconds between the start of two transfers.",
    )(f)
    f = click.option(
        "--threads", "-t", type=int, default=4, show_default=True,
        help="Maximum number of concurrent transfers.",
    )(f)
    f = click.option(
        "--dry-run", "-d", is_flag=True, default=False,
        help="Show what would be transferred.",
    )(f)
    return f


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Read connection settings from a JSON or .existdb.json file.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Log every collection and resource that was transferred.")
@click.option("--json-logs", is_flag=True, default=False, help="Emit logs as JSON.")
@click.pass_context
def main(ctx, config_path, verbose, json_logs):
    """Synchronize local files with an eXist-db instance."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    configure_logging(verbose=verbose, json_logs=json_logs)


@main.command("upload")
@click.argument("source", type=click.Path())
@click.argument("target")
@_filter_options
@_pool_options
@click.option("--apply-xconf", "-a", is_flag=True, default=False,
              help="Upload and apply index configurations before all other data. "
                   "Requires membership in the dba group.")
@click.option("--dot-files", "-D", is_flag=True, default=False,
              help="Upload dot-files as well.")
@click.pass_context
def upload(ctx, source, target, include, exclude, dry_run, threads, mintime,
           apply_xconf, dot_files):
    """Upload files and directories to a target collection."""
    opts = _options(
        include=include or ("**",),
        exclude=exclude,
        max_concurrent=threads,
        min_time_ms=mintime,
        apply_config=apply_xconf,
        dot_files=dot_files,
        dry_run=dry_run,
    )

    def action(manager: TransferManager) -> Optional[RunSummary]:
        if dry_run:
            plan = manager.plan_up(source, target, opts)
            if plan.is_empty:
                return manager.execute_plan(plan, opts)
            _print_plan(plan)
            return None
        return manager.sync_up(source, target, opts)

    _run(ctx, action)


@main.command("get")
@click.argument("source")
@click.argument("target", required=False, default=".", type=click.Path())
@_filter_options
@_pool_options
@click.option("--expand-xincludes", "-x", callback=_xml_boolean, default=None,
              help='Skip expanding XInclude elements when set to "false".')
@click.option("--omit-xml-declaration", "-X", callback=_xml_boolean, default=None,
              help='Force output of the XML declaration when set to "false".')
@click.option("--insert-final-newline", "-N", callback=_xml_boolean, default=None,
              help="Force a final newline at the end of an XML resource.")
@click.option("--serialize-as-html", "-H", default="*.html", show_default=True,
              help="Serialize resources matching this pattern as HTML.")
@click.pass_context
def get(ctx, source, target, include, exclude, dry_run, threads, mintime,
        expand_xincludes, omit_xml_declaration, insert_final_newline, serialize_as_html):
    """Download a collection or resource."""
    toggles = {
        "expand-xincludes": expand_xincludes,
        "omit-xml-declaration": omit_xml_declaration,
        "insert-final-newline": insert_final_newline,
    }
    opts = _options(
        include=include or ("**",),
        exclude=exclude,
        max_concurrent=threads,
        min_time_ms=mintime,
        dry_run=dry_run,
        serialization={k: v for k, v in toggles.items() if v is not None},
        html_glob=serialize_as_html,
    )

    def action(manager: TransferManager) -> Optional[RunSummary]:
        if dry_run:
            plan = manager.plan_down(source, target, opts)
            if plan.is_empty:
                return manager.execute_plan(plan, opts)
            _print_plan(plan)
            return None
        return manager.sync_down(source, target, opts)

    _run(ctx, action)


main.add_command(upload, "up")
main.add_command(get, "download")
