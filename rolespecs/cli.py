"""
This file is the entry point for the 'rolespecs' command-line tool.
Run 'rolespecs' in your shell to build and inspect role API documents.
"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml

from common.app_setup import monkeypatch_print, print_and_log, print_error, setup_logging
from loaders.document_loader import FileDocumentLoader
from rolespecs.exceptions import RoleSpecsError
from rolespecs.models import load_config
from rolespecs.specs import Specs

app = typer.Typer(add_completion=False, help="Build role-specific API documents from service specs.")


class OutputFormat(str, Enum):
    yaml = "yaml"
    json = "json"


class DependencyMode(str, Enum):
    transitive = "transitive"
    direct = "direct"


def _config_arg():
    return typer.Argument(..., exists=True, dir_okay=False, help="YAML or JSON build configuration")


def _root_opt():
    return typer.Option(None, "--root", help="Directory service spec paths are relative to (default: config directory)")


def _master_opt():
    return typer.Option(None, "--master", help="Pre-built master spec to use instead of merging services")


def _mode_opt():
    return typer.Option(DependencyMode.transitive, "--mode", help="Dependency chain resolution mode")


@app.callback()
def main(log_file: Optional[Path] = typer.Option(None, "--log-file", help="Log file (default: ~/.rolespecs/log.txt)"),
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages")):
    setup_logging(app_name="rolespecs", loglevel=logging.DEBUG if verbose else logging.INFO,
                  logfile=str(log_file) if log_file else None)
    monkeypatch_print()


def _load_specs(config: Path, root: Optional[Path], master: Optional[str], mode: DependencyMode) -> Specs:
    try:
        loader = FileDocumentLoader(root or config.parent)
        return Specs(load_config(config), master_spec_path=master, loader=loader, dependency_mode=mode.value)
    except RoleSpecsError as e:
        print_error(f"Failed to build specs: {e}")
        raise typer.Exit(1)


def _dump(document, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.json:
        return json.dumps(document, indent=2)
    return yaml.safe_dump(document, sort_keys=False)


def _require_role(specs: Specs, role: str):
    if specs.get_spec(role) is None:
        print_error(f"Unknown role: {role}")
        raise typer.Exit(1)


@app.command()
def build(config: Path = _config_arg(), root: Optional[Path] = _root_opt(), master: Optional[str] = _master_opt(),
          mode: DependencyMode = _mode_opt(),
          out: Path = typer.Option(Path("specs"), "--out", "-o", help="Output directory"),
          fmt: OutputFormat = typer.Option(OutputFormat.yaml, "--format", "-f", help="Output format")):
    """Build every role document and write one file per role."""
    specs = _load_specs(config, root, master, mode)
    out.mkdir(parents=True, exist_ok=True)
    for role_id in specs.role_ids:
        target = out / f"{role_id}.{fmt.value}"
        target.write_text(_dump(specs.get_spec(role_id), fmt), encoding="utf-8")
        print_and_log(f"Wrote {target} ({len(specs.get_operation_ids(role_id))} operations)")
    print_and_log(f"Built {len(specs.role_ids)} role specs in {out}")


@app.command()
def roles(config: Path = _config_arg(), root: Optional[Path] = _root_opt(), master: Optional[str] = _master_opt(),
          mode: DependencyMode = _mode_opt()):
    """List roles with their operation and definition counts."""
    specs = _load_specs(config, root, master, mode)
    if not specs.role_ids:
        print_and_log("No roles configured.")
        return
    for role_id in specs.role_ids:
        spec = specs.get_spec(role_id)
        print_and_log(f"Role: {role_id} | Operations: {len(specs.get_operation_ids(role_id))} "
                      f"| Definitions: {len(spec.get('definitions') or {})}")


@app.command()
def show(config: Path = _config_arg(), role: str = typer.Argument(..., help="Role id"),
         root: Optional[Path] = _root_opt(), master: Optional[str] = _master_opt(), mode: DependencyMode = _mode_opt(),
         fmt: OutputFormat = typer.Option(OutputFormat.yaml, "--format", "-f", help="Output format")):
    """Print the document built for one role."""
    specs = _load_specs(config, root, master, mode)
    _require_role(specs, role)
    typer.echo(_dump(specs.get_spec(role), fmt))


@app.command()
def operations(config: Path = _config_arg(), role: str = typer.Argument(..., help="Role id"),
               root: Optional[Path] = _root_opt(), master: Optional[str] = _master_opt(),
               mode: DependencyMode = _mode_opt()):
    """Print the operation ids available to one role."""
    specs = _load_specs(config, root, master, mode)
    _require_role(specs, role)
    for operation_id in specs.get_operation_ids(role):
        typer.echo(operation_id)


@app.command()
def dependencies(config: Path = _config_arg(), role: str = typer.Argument(..., help="Role id"),
                 root: Optional[Path] = _root_opt(), master: Optional[str] = _master_opt(),
                 mode: DependencyMode = _mode_opt()):
    """Print the dependency chains of one role's operations."""
    specs = _load_specs(config, root, master, mode)
    _require_role(specs, role)
    for chain in specs.get_dependency_operation_ids(role):
        typer.echo(chain)


if __name__ == "__main__":
    app()
