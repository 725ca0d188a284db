from __future__ import annotations

import argparse
import json
import sys

from . import __version__
from .config import load_config
from .core.context import RunContext
from .core.logging import log_event
from .errors import ScriptError
from .exit_codes import ERR_INTERNAL, OK
from .generate import GenerationReport, generate

TOOL = "gen-p5"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=TOOL,
        description="compile the go-p5 examples to WASM and generate the examples site",
    )
    p.add_argument("--version", action="version", version=f"{TOOL} {__version__}")
    p.add_argument("--vers", default="main", help="version of go-p5/p5 to generate examples for")
    p.add_argument("--config", help="optional YAML site configuration (default: $GEN_P5_CONFIG)")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--format", choices=["text", "json"], default="text", help="log and summary format")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="log every external command")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    return p


def build_payload(ctx: RunContext, report: GenerationReport) -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": TOOL,
        "status": "ok",
        "run_id": ctx.run_id,
        "version": report.version,
        "revision": report.revision,
        "examples": list(report.examples),
        "skipped": list(report.skipped),
        "staged": [p.relative_to(ctx.dest_root).as_posix() for p in report.staged],
        "index": report.index_path.relative_to(ctx.dest_root).as_posix(),
    }


def render_error(*, as_json: bool, message: str, code: int, kind: str) -> str:
    if as_json:
        return json.dumps(
            {
                "schema_version": 1,
                "tool": TOOL,
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            sort_keys=True,
        )
    return f"{TOOL}: {message}"


def render_summary(payload: dict[str, object]) -> str:
    lines = [f"{TOOL}: {payload['status']} (version={payload['version']} revision={payload['revision']})"]
    for key in ("examples", "skipped", "staged"):
        values = payload.get(key) or []
        lines.append(f"- {key}: " + (", ".join(str(v) for v in values) if values else "none"))
    lines.append(f"- index: {payload['index']}")
    return "\n".join(lines)


def _emit(payload: dict[str, object], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, sort_keys=True))
    else:
        print(render_summary(payload))


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    ctx = RunContext.from_args(ns.run_id, output_format=ns.format, verbose=ns.verbose, quiet=ns.quiet)
    as_json = ctx.output_format == "json"
    try:
        log_event(ctx, "info", "cli", "start", vers=ns.vers, dest=str(ctx.dest_root))
        config = load_config(ns.config)
        report = generate(ctx, config, ns.vers)
        if not ctx.quiet:
            _emit(build_payload(ctx, report), as_json)
        return OK
    except ScriptError as exc:
        log_event(ctx, "error", "cli", "error", kind=exc.kind, code=exc.code)
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL, kind="internal"),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
