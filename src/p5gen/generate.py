"""Build the go-p5 examples site from an upstream checkout.

The run is strictly linear and fail-fast: the first ``ScriptError`` aborts
it. Artifacts written and staged before the failure are left in place and
``index.html`` is only written once every example has been built.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

from .config import SiteConfig
from .core import fs, git, toolchain
from .core.context import RunContext
from .core.logging import log_event
from .errors import ScriptError
from .exit_codes import ERR_ARTIFACT
from .render import render_example_page, render_index, render_index_item


@dataclass(frozen=True)
class GenerationReport:
    version: str
    revision: str
    workdir: Path
    examples: tuple[str, ...]
    skipped: tuple[str, ...]
    staged: tuple[Path, ...]
    index_path: Path


def list_examples(checkout: Path) -> list[str]:
    root = checkout / "example"
    try:
        return sorted(entry.name for entry in root.iterdir() if entry.is_dir())
    except OSError as exc:
        raise ScriptError(f"could not read dir {root}: {exc}", ERR_ARTIFACT, kind="enumerate_failed") from exc


def publish_bootstrap(ctx: RunContext, config: SiteConfig) -> Path:
    js = toolchain.load_wasm_exec(ctx, config.bootstrap_name)
    assets = fs.ensure_dir(ctx.dest_root / "assets")
    out = fs.write_bytes(assets / config.bootstrap_name, js)
    log_event(ctx, "info", "gen", "bootstrap", path=out.relative_to(ctx.dest_root).as_posix())
    return out


def build_example(ctx: RunContext, config: SiteConfig, checkout: Path, bin_dir: Path, name: str) -> Path:
    """Compile one example and publish its page and binary; return the staged path."""
    log_event(ctx, "info", "gen", "build", example=f"example/{name}")
    artifact = config.artifact_name(name)
    built = bin_dir / artifact
    toolchain.build_wasm(ctx, checkout, f"example/{name}", built, bin_dir)

    dest = fs.ensure_dir(ctx.dest_root / "example" / name)
    page = render_example_page(
        title=config.title_prefix + name,
        src=config.artifact_url(name),
        bootstrap=config.bootstrap_url(),
    )
    fs.write_text(dest / "index.html", page)

    target = fs.copy_file(built, dest / artifact)
    git.stage_path(ctx, target.relative_to(ctx.dest_root))
    return target


def generate(ctx: RunContext, config: SiteConfig, version: str) -> GenerationReport:
    with tempfile.TemporaryDirectory(prefix=config.tmp_prefix) as tmp_name:
        tmp = Path(tmp_name)
        log_event(ctx, "info", "gen", "clone", repo=config.upstream_repo, version=version, workdir=str(tmp))
        checkout = git.shallow_clone(ctx, config.upstream_repo, version, tmp, config.clone_dir)

        revision = git.describe_revision(ctx, checkout)
        log_event(ctx, "info", "gen", "revision", revision=revision)

        publish_bootstrap(ctx, config)

        names = list_examples(checkout)
        for name in names:
            log_event(ctx, "info", "gen", "example-found", example=name)

        bin_dir = tmp / "bin"
        items: list[str] = []
        built: list[str] = []
        skipped: list[str] = []
        staged: list[Path] = []
        for name in names:
            if name in config.excludes:
                log_event(ctx, "info", "gen", "ignore", example=name)
                skipped.append(name)
                continue
            staged.append(build_example(ctx, config, checkout, bin_dir, name))
            items.append(render_index_item(config.page_url(name), name))
            built.append(name)

        index_path = fs.write_text(ctx.dest_root / "index.html", render_index(revision, items))
        log_event(ctx, "info", "gen", "index", path="index.html", examples=len(items))

    log_event(ctx, "info", "gen", "done", revision=revision, examples=len(built), skipped=len(skipped))
    return GenerationReport(
        version=version,
        revision=revision,
        workdir=tmp,
        examples=tuple(built),
        skipped=tuple(skipped),
        staged=tuple(staged),
        index_path=index_path,
    )
