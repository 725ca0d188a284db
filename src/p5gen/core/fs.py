from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_ARTIFACT


def ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScriptError(f"could not create {path}: {exc}", ERR_ARTIFACT, kind="mkdir_failed") from exc
    return path


def write_text(path: Path, content: str, encoding: str = "utf-8") -> Path:
    try:
        path.write_text(content, encoding=encoding)
    except OSError as exc:
        raise ScriptError(f"could not write {path}: {exc}", ERR_ARTIFACT, kind="write_failed") from exc
    return path


def write_bytes(path: Path, content: bytes) -> Path:
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise ScriptError(f"could not write {path}: {exc}", ERR_ARTIFACT, kind="write_failed") from exc
    return path


def copy_file(src: Path, dst: Path) -> Path:
    try:
        shutil.copyfile(src, dst)
    except OSError as exc:
        raise ScriptError(f"could not copy {src} to {dst}: {exc}", ERR_ARTIFACT, kind="copy_failed") from exc
    return dst
