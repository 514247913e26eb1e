"""Shared fixtures: fake LaTeX compilers and recording openers."""

import sys
from pathlib import Path

import pytest

from circuitgrid.contexts.rendering.exceptions import DocumentOpenError

# Fake compilers are /bin/sh scripts called as: <script> -interaction=nonstopmode <stem>.tex
SUCCEEDING_COMPILER = r"""
stem="${2%.tex}"
echo "This is fakeTeX, Version 3.14" > "$stem.log"
echo '\relax' > "$stem.aux"
printf '%%PDF-1.4\n%%%%EOF\n' > "$stem.pdf"
exit 0
"""

# Fails unless the source uses the standalone document class
STRICT_COMPILER = r"""
stem="${2%.tex}"
if ! grep -q 'documentclass{standalone}' "$2"; then
    echo "! LaTeX Error: File \`nonexistent.cls' not found." > "$stem.log"
    echo "LaTeX Warning: Reference undefined." >> "$stem.log"
    exit 1
fi
echo "This is fakeTeX, Version 3.14" > "$stem.log"
echo '\relax' > "$stem.aux"
printf '%%PDF-1.4\n%%%%EOF\n' > "$stem.pdf"
exit 0
"""

HANGING_COMPILER = r"""
exec sleep 30
"""

requires_posix_shell = pytest.mark.skipif(
    sys.platform == "win32", reason="fake compilers are /bin/sh scripts"
)


@pytest.fixture
def make_compiler(tmp_path):
    """Factory writing an executable fake compiler script, returns its absolute path."""

    def _make(script: str, name: str = "fake-latex") -> str:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        path = bin_dir / name
        path.write_text("#!/bin/sh\n" + script.lstrip("\n"))
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def fake_compiler(make_compiler):
    return make_compiler(SUCCEEDING_COMPILER, name="fake-pdflatex")


@pytest.fixture
def strict_compiler(make_compiler):
    return make_compiler(STRICT_COMPILER, name="strict-pdflatex")


@pytest.fixture
def hanging_compiler(make_compiler):
    return make_compiler(HANGING_COMPILER, name="hanging-pdflatex")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory, separate from the fake compiler's bin/ dir."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


class RecordingOpener:
    """Opener that records paths instead of launching a viewer."""

    def __init__(self, error: str = None):
        self.opened = []
        self.error = error

    async def __call__(self, path: Path) -> None:
        self.opened.append(Path(path))
        if self.error is not None:
            raise DocumentOpenError(Path(path), self.error)


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def failing_opener():
    return RecordingOpener(error="no application registered for PDF files")
