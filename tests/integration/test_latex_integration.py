"""
Integration tests against a real pdflatex with the circuitikz package.
"""

import shutil
import subprocess

import pytest

from circuitgrid.contexts.generation.pipeline import generate
from circuitgrid.contexts.rendering.compiler import compile_source
from circuitgrid.contexts.rendering.exceptions import CompileFailedError
from circuitgrid.contexts.scene.models import ComponentKind, Scene
from circuitgrid.contexts.templating.renderer import render


def _circuitikz_available() -> bool:
    if shutil.which("pdflatex") is None or shutil.which("kpsewhich") is None:
        return False
    found = subprocess.run(["kpsewhich", "circuitikz.sty"], capture_output=True, text=True)
    return bool(found.stdout.strip())


skip_if_no_latex = pytest.mark.skipif(
    not _circuitikz_available(),
    reason="pdflatex with circuitikz not installed - install TeX Live, MiKTeX, or MacTeX",
)

pytestmark = [pytest.mark.integration, pytest.mark.latex, pytest.mark.asyncio, skip_if_no_latex]


async def test_compile_rendered_scene(workdir):
    """Test compiling a rendered NMOS scene with pdflatex."""
    scene = Scene(width=10, height=10)
    scene.add_component(ComponentKind.NMOS, 5, 5)

    result = await compile_source(*render(scene), "grid", compiler="pdflatex", timeout_s=120)

    assert result.pdf_path.exists()
    assert result.pdf_path.stat().st_size > 0


async def test_compile_unresolvable_header(workdir):
    """Test that pdflatex fails on a missing document class."""
    with pytest.raises(CompileFailedError) as exc_info:
        await compile_source(
            "\\documentclass{definitely-not-a-class}", "x", "broken", compiler="pdflatex", timeout_s=120
        )

    assert exc_info.value.errors


async def test_generate_end_to_end(workdir, opener):
    """Test generate() with pdflatex from scene to opened PDF."""
    outcome = await generate(
        Scene(width=10, height=10), "grid", compiler="pdflatex", opener=opener, timeout_s=120,
        keep_artifacts=False,
    )

    assert outcome.success, outcome.message
    assert (workdir / "grid.pdf").exists()
    assert not (workdir / "grid.aux").exists()
    assert not (workdir / "grid.log").exists()
