from __future__ import annotations

import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


def overlay_env(overrides: Mapping[str, str]) -> dict[str, str]:
    """Return the inherited environment with ``overrides`` taking precedence."""
    env = dict(os.environ)
    env.update(overrides)
    return env


def run_command(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    passthrough: bool = False,
    ctx: RunContext | None = None,
) -> CommandResult:
    """Run ``cmd`` to completion and report its exit status.

    With ``passthrough`` the child writes straight to the invoking terminal
    and the returned result carries no output. Otherwise stdout and stderr
    are captured. A missing executable is reported as exit code 127, any
    other failure to start the child (missing or unusable ``cwd``, no execute
    permission) as 126.
    """
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=(dict(env) if env is not None else None),
            text=True,
            capture_output=not passthrough,
            check=False,
        )
        result = CommandResult(
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    except OSError as exc:
        if isinstance(exc, FileNotFoundError) and str(exc.filename) == cmd[0]:
            code, message = 127, f"command not found: {cmd[0]}"
        else:
            code, message = 126, f"could not run {cmd[0]} in {cwd}: {exc}"
        result = CommandResult(
            code=code,
            stdout="",
            stderr=message,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    if ctx:
        log_event(
            ctx,
            "debug",
            "process",
            "run-command",
            command=" ".join(cmd),
            cwd=str(cwd),
            code=result.code,
            duration_ms=result.duration_ms,
        )
    return result
