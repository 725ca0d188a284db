"""Go toolchain helpers: locating the installation and building WASM binaries."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_BUILD, ERR_PREREQ
from . import process
from .context import RunContext

# Older toolchains ship the bootstrap script under misc/, Go 1.24+ under lib/.
WASM_EXEC_DIRS = (Path("misc") / "wasm", Path("lib") / "wasm")


def go_root(ctx: RunContext) -> Path:
    res = process.run_command(["go", "env", "GOROOT"], ctx.dest_root, ctx=ctx)
    root = res.stdout.strip() if res.ok else ""
    if not root:
        root = os.environ.get("GOROOT", "")
    if not root:
        raise ScriptError(
            f"could not locate the Go installation: {res.combined_output or 'GOROOT unset'}",
            ERR_PREREQ,
            kind="missing_toolchain",
        )
    return Path(root)


def load_wasm_exec(ctx: RunContext, name: str = "wasm_exec.js") -> bytes:
    root = go_root(ctx)
    candidates = [root / sub / name for sub in WASM_EXEC_DIRS]
    for path in candidates:
        if path.is_file():
            return path.read_bytes()
    raise ScriptError(
        "could not find WASM bootstrap code: " + ", ".join(str(p) for p in candidates),
        ERR_PREREQ,
        kind="missing_bootstrap",
    )


def build_wasm(ctx: RunContext, module_dir: Path, package: str, output: Path, gobin: Path) -> None:
    """Compile ``./<package>`` inside ``module_dir`` for the js/wasm target."""
    env = process.overlay_env({"GOBIN": str(gobin), "GOOS": "js", "GOARCH": "wasm"})
    res = process.run_command(
        ["go", "build", "-o", os.path.relpath(output, module_dir), f"./{package}"],
        module_dir,
        env=env,
        passthrough=True,
        ctx=ctx,
    )
    if not res.ok:
        detail = f": {res.stderr}" if res.stderr else ""
        raise ScriptError(
            f"could not build WASM {package!r} (exit {res.code}){detail}",
            ERR_BUILD,
            kind="build_failed",
        )
