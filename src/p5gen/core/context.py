from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

OutputFormat = Literal["text", "json"]


def make_run_id(prefix: str = "gen-p5") -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return f"{prefix}-{ts}-{os.getpid()}"


@dataclass(frozen=True)
class RunContext:
    """Per-invocation settings shared by the generator and its helpers.

    ``dest_root`` is the directory receiving ``assets/``, ``example/`` and
    ``index.html``; it is also where generated artifacts get staged.
    """

    run_id: str
    dest_root: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool

    @property
    def log_json(self) -> bool:
        return self.output_format == "json"

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        dest_root: Path | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
    ) -> "RunContext":
        resolved_run_id = run_id or os.environ.get("RUN_ID") or make_run_id()
        root = (dest_root or Path.cwd()).resolve()
        return cls(
            run_id=resolved_run_id,
            dest_root=root,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
        )
