"""Click-based CLI interface for CodeGuardian."""

import json
import logging
import sys
from pathlib import Path

import click

from codeguardian.config import Config, build_registry, load_config
from codeguardian.engine import ScanEngine
from codeguardian.formatters.sarif import render_sarif
from codeguardian.models import ScanResult, Severity
from codeguardian.report import render_json, render_rules, render_table
from codeguardian.service import ScanRequest, ScanService, ValidationError, validate_request

SEVERITY_CHOICES = [s.name for s in Severity]
STDIN = "-"


def _load(ctx: click.Context, project_root: str | None = None) -> tuple[Config, ScanEngine]:
    try:
        config = load_config(ctx.obj.get("config_path"), project_root=project_root)
        engine = ScanEngine(build_registry(config))
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    return config, engine


def _project_root(path: str) -> str | None:
    if path == STDIN:
        return None
    p = Path(path)
    return str(p if p.is_dir() else p.parent)


def _read_stdin() -> str:
    return click.get_text_stream("stdin").read()


def _emit(results: list[ScanResult], fmt: str, min_severity: Severity, output: str | None) -> None:
    if fmt in ("json", "sarif"):
        if fmt == "sarif":
            text_out = render_sarif(results, min_severity=min_severity)
        else:
            text_out = render_json(results, min_severity=min_severity)
        if output:
            Path(output).write_text(text_out)
            click.echo(f"Report written to {output}")
        else:
            click.echo(text_out)
    else:
        render_table(results, min_severity=min_severity)
        if output:
            Path(output).write_text(render_json(results, min_severity=min_severity))
            click.echo(f"JSON report also written to {output}")


@click.group()
@click.version_option(package_name="codeguardian")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .codeguardian.yml config file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, config_path, verbose):
    """CodeGuardian - Pattern-based source code security scanner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.argument("path", type=click.Path(exists=True, allow_dash=True))
@click.option("--format", "fmt", type=click.Choice(["table", "json", "sarif"]), default="table")
@click.option("--severity", "min_severity", type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
              default=None, help="Minimum severity to report (defaults to the config threshold).")
@click.option("--output", "-o", type=str, default=None, help="Write JSON report to file.")
@click.option("--exit-code", is_flag=True, help="Exit with code 1 if findings >= severity.")
@click.option("--language", type=str, default=None, help="Language hint, reported as-is.")
@click.pass_context
def scan(ctx, path, fmt, min_severity, output, exit_code, language):
    """Scan a file, a directory, or '-' for standard input."""
    config, engine = _load(ctx, _project_root(path))
    sev = Severity.parse(min_severity) if min_severity else config.min_severity

    if path == STDIN:
        code = _read_stdin()
        try:
            validate_request(ScanRequest(code=code, language=language), config.max_code_size)
        except ValidationError as exc:
            raise click.ClickException(str(exc)) from exc
        results = [engine.scan_text(code, target="<stdin>", language=language)]
    else:
        results = engine.scan_path(path, config.exclude_patterns, max_bytes=config.max_code_size)
        for r in results:
            r.language = language

    _emit(results, fmt, sev, output)

    if exit_code and any(r.filtered(sev) for r in results):
        sys.exit(1)


@cli.command()
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
@click.pass_context
def rules(ctx, fmt):
    """List the active detection rules."""
    _, engine = _load(ctx)
    if fmt == "json":
        click.echo(json.dumps(ScanService(engine).rules(), indent=2))
    else:
        render_rules(engine.registry)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--language", type=str, default=None, help="Language hint, reported as-is.")
@click.pass_context
def validate(ctx, path, language):
    """Check that a file is acceptable for scanning."""
    config, engine = _load(ctx, _project_root(path))
    code = _read_stdin() if path == STDIN else Path(path).read_text(errors="ignore")
    service = ScanService(engine, max_code_size=config.max_code_size)
    response = service.validate(ScanRequest(code=code, language=language, filename=path))
    click.echo(json.dumps(response, indent=2))
    if not response["success"]:
        sys.exit(1)
