from __future__ import annotations

from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_ARTIFACT, ERR_VCS
from . import process
from .context import RunContext


def shallow_clone(ctx: RunContext, repo_url: str, ref: str, parent: Path, name: str) -> Path:
    """Clone ``ref`` of ``repo_url`` at depth 1 into ``parent/name`` and return that checkout."""
    res = process.run_command(
        ["git", "clone", "--depth=1", "-b", ref, repo_url, name],
        parent,
        passthrough=True,
        ctx=ctx,
    )
    if not res.ok:
        detail = f": {res.stderr}" if res.stderr else ""
        raise ScriptError(
            f"could not clone {repo_url} at {ref!r} (exit {res.code}){detail}",
            ERR_VCS,
            kind="clone_failed",
        )
    return parent / name


def describe_revision(ctx: RunContext, checkout: Path) -> str:
    res = process.run_command(["git", "describe", "--tags", "--always"], checkout, ctx=ctx)
    revision = res.combined_output
    if not res.ok:
        raise ScriptError(
            f"could not retrieve git revision:\n{revision}\nexit code: {res.code}",
            ERR_VCS,
            kind="describe_failed",
        )
    return revision


def stage_path(ctx: RunContext, path: Path) -> None:
    res = process.run_command(["git", "add", str(path)], ctx.dest_root, ctx=ctx)
    if not res.ok:
        raise ScriptError(
            f"could not add {path} to repository (exit {res.code}): {res.combined_output}",
            ERR_ARTIFACT,
            kind="stage_failed",
        )
