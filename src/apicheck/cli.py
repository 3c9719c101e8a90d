from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console

from apicheck import __version__
from apicheck.config import OUTPUT_FORMATS, ApiCheckConfig, ConfigError, load_config, resolve_rule_set
from apicheck.engine.types import InvalidRuleSet
from apicheck.logging_utils import configure_logging
from apicheck.reporters.json_reporter import render_json
from apicheck.reporters.terminal import render_terminal
from apicheck.reporters.text import render_text
from apicheck.rules.ruleset import RuleSet
from apicheck.scanner import FileReport, check_files

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="apicheck — find JavaScript API usages unsupported by a target runtime.",
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_FINDINGS = 1
EXIT_ERROR = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logs (printed to stderr)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Reduce non-essential output."),
    ] = False,
) -> None:
    """apicheck CLI."""

    if verbose and quiet:
        raise typer.BadParameter("Choose at most one: --verbose or --quiet.")
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


def _cli_settings() -> dict[str, bool]:
    ctx = click.get_current_context(silent=True)
    if ctx is None or not isinstance(ctx.obj, dict):
        return {"verbose": False, "quiet": False}
    return {"verbose": bool(ctx.obj.get("verbose", False)), "quiet": bool(ctx.obj.get("quiet", False))}


def _effective_config(
    project_dir: Path,
    *,
    rules: list[Path] | None,
    builtin: list[str] | None,
    no_builtin: bool,
) -> ApiCheckConfig:
    try:
        config = load_config(project_dir)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if no_builtin:
        config = replace(config, builtin=())
    elif builtin:
        config = replace(config, builtin=tuple(builtin))
    if rules:
        # CLI rule files are resolved against the cwd, not the project dir.
        config = replace(config, rules=config.rules + tuple(str(p.resolve()) for p in rules))
    return config


def _load_rule_set(config: ApiCheckConfig, *, project_dir: Path) -> RuleSet:
    try:
        rule_set = resolve_rule_set(config, project_dir=project_dir)
    except InvalidRuleSet as exc:
        raise typer.BadParameter(str(exc)) from exc
    logger.debug("effective rule set: %d member rule(s)", len(rule_set.member_expression_rules))
    return rule_set


def _emit_output(fmt: str, *, reports: list[FileReport], project_root: Path, show_details: bool = True) -> None:
    normalized = fmt.strip().lower()
    if normalized == "text":
        text = render_text(reports, project_root=project_root)
        if text:
            typer.echo(text, nl=False)
        return
    if normalized == "terminal":
        render_terminal(reports, project_root=project_root, console=console, show_details=show_details)
        return
    if normalized == "json":
        typer.echo(render_json(reports, project_root=project_root))
        return
    raise typer.BadParameter(f"Unsupported format. Use: {', '.join(OUTPUT_FORMATS)}.")


RulesOption = Annotated[
    list[Path] | None,
    typer.Option("--rules", "-r", help="Extra JSON rule file (repeatable).", exists=True, dir_okay=False),
]
BuiltinOption = Annotated[
    list[str] | None,
    typer.Option("--builtin", "-b", help="Built-in rule set to enable (repeatable). Defaults to all."),
]
NoBuiltinOption = Annotated[
    bool,
    typer.Option("--no-builtin", help="Disable every built-in rule set."),
]
ProjectOption = Annotated[
    Path,
    typer.Option("--project", help="Directory holding the pyproject.toml with the tool.apicheck table.", file_okay=False),
]


@app.command()
def check(
    paths: Annotated[list[Path], typer.Argument(help="JavaScript files to analyze.", exists=True, dir_okay=False)],
    rules: RulesOption = None,
    builtin: BuiltinOption = None,
    no_builtin: NoBuiltinOption = False,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help=f"Output format: {', '.join(OUTPUT_FORMATS)}."),
    ] = None,
    workers: Annotated[int | None, typer.Option("--workers", "-j", min=1, help="Files analyzed in parallel.")] = None,
    project: ProjectOption = Path("."),
) -> None:
    """Report unsupported API usages in the given files."""

    config = _effective_config(project, rules=rules, builtin=builtin, no_builtin=no_builtin)
    rule_set = _load_rule_set(config, project_dir=project)
    if rule_set.is_empty():
        logger.warning("rule set is empty; nothing will be reported")

    settings = _cli_settings()
    logger.debug("checking %d file(s)", len(paths))

    fmt = (output_format or config.format).strip().lower()
    reports = check_files(paths, rule_set, workers=workers or config.workers)
    _emit_output(fmt, reports=reports, project_root=Path.cwd(), show_details=not settings["quiet"])

    if fmt == "json" or (fmt == "terminal" and settings["quiet"]):
        # the detailed reports list file errors inline
        for report in reports:
            if report.error is not None:
                err_console.print(f"error {report.path}: {report.error}", style="red", soft_wrap=True, markup=False)
    if any(r.error is not None for r in reports):
        raise typer.Exit(EXIT_ERROR)
    if any(r.diagnostics for r in reports):
        raise typer.Exit(EXIT_FINDINGS)
    logger.info("no invalid API invokes found in %d file(s)", len(reports))


@app.command(name="rules")
def list_rules(
    rules: RulesOption = None,
    builtin: BuiltinOption = None,
    no_builtin: NoBuiltinOption = False,
    project: ProjectOption = Path("."),
) -> None:
    """List the effective rule set."""

    config = _effective_config(project, rules=rules, builtin=builtin, no_builtin=no_builtin)
    rule_set = _load_rule_set(config, project_dir=project)
    for category, entries in rule_set.categories.items():
        typer.echo(f"{category} ({len(entries)})")
        for rule in entries:
            typer.echo(f"  {rule.label}")
