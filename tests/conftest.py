from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from batch_publish.core.process import ProcessResult


class FakeRunner:
    """Records every command and answers based on the targeted entry name."""

    def __init__(
        self,
        *,
        exit_codes: dict[str, int] | None = None,
        stderr: dict[str, str] | None = None,
        raises: dict[str, BaseException] | None = None,
    ) -> None:
        self.exit_codes = exit_codes or {}
        self.stderr = stderr or {}
        self.raises = raises or {}
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []

    async def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        command = list(argv)
        self.calls.append(command)
        self.timeouts.append(timeout)
        name = Path(command[-1]).name
        if name in self.raises:
            raise self.raises[name]
        return ProcessResult(
            argv=command,
            returncode=self.exit_codes.get(name, 0),
            stdout=f"published {name}\n",
            stderr=self.stderr.get(name, ""),
            elapsed=0.01,
        )

    @property
    def targets(self) -> list[str]:
        return [call[-1] for call in self.calls]


@pytest.fixture
def make_root(tmp_path: Path):
    def _make(*names: str, files: Sequence[str] = ()) -> Path:
        root = tmp_path / "libs"
        root.mkdir()
        for name in names:
            (root / name).mkdir()
        for name in files:
            (root / name).write_text("", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    return FakeRunner
