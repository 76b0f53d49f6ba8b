"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
all specialized command modules.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    All specialized command modules (gcloud, Docker, kubectl) use this
    runner for actual command execution. Commands never raise on a
    non-zero exit; callers inspect the returned CommandResult.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the command runner.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self.project_root = project_root

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        input_data: str | None = None,
    ) -> CommandResult:
        """Execute a shell command and return structured result.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            capture_output: Whether to capture stdout/stderr. When False the
                           tool writes straight to the terminal.
            input_data: Optional text piped to the command's stdin

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            FileNotFoundError: If the executable is not installed
        """
        argv = list(cmd)
        logger.debug("$ {}", shlex.join(argv))

        result = subprocess.run(
            argv,
            cwd=cwd or self.project_root,
            capture_output=capture_output,
            text=True,
            input=input_data,
            check=False,
        )

        if result.returncode != 0:
            logger.warning(
                "Command exited with status {}: {}", result.returncode, shlex.join(argv)
            )

        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
            command=argv,
        )
