from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from p5gen.core.process import CommandResult

WASM_MAGIC = b"\x00asm\x01\x00\x00\x00"
WASM_EXEC_JS = b"// fake wasm_exec.js\n\"use strict\";\n"


@dataclass
class Call:
    cmd: list[str]
    cwd: Path
    env: Mapping[str, str] | None
    passthrough: bool


@dataclass
class FakeTools:
    """Stands in for ``git`` and ``go`` behind ``p5gen.core.process.run_command``."""

    root: Path
    examples: tuple[str, ...] = ("a", "b", "sketch")
    revision: str = "v0.1.0-4-g1a2b3c4"
    clone_code: int = 0
    describe_code: int = 0
    fail_build: frozenset[str] = frozenset()
    fail_stage: frozenset[str] = frozenset()
    wasm_dir: str = "misc/wasm"
    calls: list[Call] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.goroot = self.root / "goroot"
        (self.goroot / self.wasm_dir).mkdir(parents=True, exist_ok=True)
        (self.goroot / self.wasm_dir / "wasm_exec.js").write_bytes(WASM_EXEC_JS)

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        passthrough: bool = False,
        ctx: object = None,
    ) -> CommandResult:
        self.calls.append(Call(list(cmd), Path(cwd), env, passthrough))
        if cmd[:2] == ["git", "clone"]:
            if self.clone_code == 0:
                example_root = Path(cwd) / cmd[-1] / "example"
                example_root.mkdir(parents=True)
                (example_root / "README.md").write_text("not an example\n", encoding="utf-8")
                for name in self.examples:
                    (example_root / name).mkdir()
                    (example_root / name / "main.go").write_text("package main\n", encoding="utf-8")
            return CommandResult(self.clone_code, "", "", 1)
        if cmd[:2] == ["git", "describe"]:
            out = self.revision if self.describe_code == 0 else "fatal: not a git repository"
            return CommandResult(self.describe_code, out + "\n", "", 1)
        if cmd[:3] == ["go", "env", "GOROOT"]:
            return CommandResult(0, f"{self.goroot}\n", "", 1)
        if cmd[:2] == ["go", "build"]:
            name = cmd[-1].rsplit("/", 1)[-1]
            if name in self.fail_build:
                return CommandResult(1, "", "", 1)
            out = (Path(cwd) / cmd[3]).resolve()
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(WASM_MAGIC + name.encode())
            return CommandResult(0, "", "", 1)
        if cmd[:2] == ["git", "add"]:
            name = Path(cmd[2]).stem
            if name in self.fail_stage:
                return CommandResult(128, "", "fatal: not a git repository", 1)
            return CommandResult(0, "", "", 1)
        raise AssertionError(f"unexpected command: {cmd}")

    def commands(self, *prefix: str) -> list[list[str]]:
        return [c.cmd for c in self.calls if c.cmd[: len(prefix)] == list(prefix)]

    def built(self) -> list[str]:
        return [cmd[-1].rsplit("/", 1)[-1] for cmd in self.commands("go", "build")]

    def workdir(self) -> Path:
        return next(c.cwd for c in self.calls if c.cmd[:2] == ["git", "clone"])
