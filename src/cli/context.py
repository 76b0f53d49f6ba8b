"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import CLIConsole, console
from src.utils.paths import resolve_project_root


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    project_root: Path
    commands: ShellCommands


def build_cli_context(project_root: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext rooted at the application directory."""
    root = resolve_project_root(project_root)

    return CLIContext(
        console=console,
        project_root=root,
        commands=ShellCommands(root),
    )


def get_cli_context(
    ctx: typer.Context | None = None, project_root: Path | None = None
) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context(project_root)
