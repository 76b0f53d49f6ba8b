"""Test helpers: a scripted command runner and result builders.

No test runs a real gcloud, docker or kubectl: command modules are wired to
a ScriptedRunner that records every invocation and replays canned results.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.cli.deployment.shell_commands import (
    DockerCommands,
    GcloudCommands,
    KubectlCommands,
    ShellCommands,
)
from src.cli.deployment.shell_commands.types import CommandResult

Responder = Callable[[list[str], str | None], CommandResult]


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(success=True, stdout=stdout, returncode=0)


def fail(stderr: str = "", returncode: int = 1) -> CommandResult:
    return CommandResult(success=False, stderr=stderr, returncode=returncode)


@dataclass
class RecordedCall:
    argv: list[str]
    input_data: str | None
    capture_output: bool


@dataclass
class ScriptedRunner:
    """CommandRunner stand-in answering by argv prefix.

    Responses registered with `on()` are matched longest-prefix-first. A
    list of results is consumed one per call, the last one repeating.
    Unmatched commands succeed with empty output.
    """

    calls: list[RecordedCall] = field(default_factory=list)
    _responses: dict[tuple[str, ...], list[CommandResult] | Responder] = field(
        default_factory=dict
    )

    def on(
        self, prefix: Sequence[str], *results: CommandResult | Responder
    ) -> ScriptedRunner:
        if len(results) == 1 and callable(results[0]):
            self._responses[tuple(prefix)] = results[0]  # type: ignore[assignment]
        else:
            self._responses[tuple(prefix)] = list(results)  # type: ignore[arg-type]
        return self

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        input_data: str | None = None,
    ) -> CommandResult:
        argv = list(cmd)
        self.calls.append(RecordedCall(argv, input_data, capture_output))

        for prefix in sorted(self._responses, key=len, reverse=True):
            if tuple(argv[: len(prefix)]) == prefix:
                response = self._responses[prefix]
                if callable(response):
                    return response(argv, input_data)
                return response.pop(0) if len(response) > 1 else response[0]
        return ok()

    def calls_matching(self, *prefix: str) -> list[RecordedCall]:
        return [c for c in self.calls if tuple(c.argv[: len(prefix)]) == prefix]


def build_commands(runner: Any, project_root: Path) -> ShellCommands:
    """ShellCommands whose tool modules all use the given runner."""
    commands = ShellCommands(project_root)
    commands.gcloud = GcloudCommands(runner)
    commands.docker = DockerCommands(runner)
    commands.kubectl = KubectlCommands(runner)
    return commands


