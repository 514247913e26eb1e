"""Unit tests for opening the compiled PDF and cleaning up artifacts."""

import shutil
import sys
from pathlib import Path

import pytest

from circuitgrid.contexts.rendering.exceptions import DocumentOpenError
from circuitgrid.contexts.rendering.opener import (
    finalize,
    open_document,
    remove_artifacts,
    viewer_command,
)

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses true/false binaries")


def _touch_outputs(base: Path, extensions=(".tex", ".pdf", ".aux", ".log")):
    for ext in extensions:
        Path(f"{base}{ext}").write_text("x")


@pytest.mark.unit
def test_viewer_command_platform_defaults():
    """Test default launchers per platform."""
    assert viewer_command(Path("grid.pdf"), platform="darwin") == ["open", "grid.pdf"]
    assert viewer_command(Path("grid.pdf"), platform="linux") == ["xdg-open", "grid.pdf"]


@pytest.mark.unit
def test_viewer_command_override_with_arguments():
    """Test a configured viewer with its own arguments."""
    cmd = viewer_command(Path("grid.pdf"), viewer="zathura --fork", platform="linux")

    assert cmd == ["zathura", "--fork", "grid.pdf"]


@pytest.mark.unit
def test_remove_artifacts_keeps_source_and_pdf(tmp_path):
    """Test that only .aux and .log are removed."""
    base = tmp_path / "grid"
    _touch_outputs(base)

    removed = remove_artifacts(base)

    assert sorted(p.name for p in removed) == ["grid.aux", "grid.log"]
    assert (tmp_path / "grid.tex").exists()
    assert (tmp_path / "grid.pdf").exists()
    assert not (tmp_path / "grid.aux").exists()
    assert not (tmp_path / "grid.log").exists()


@pytest.mark.unit
def test_remove_artifacts_is_idempotent(tmp_path):
    """Test removing artifacts that do not exist."""
    base = tmp_path / "grid"

    assert remove_artifacts(base) == []
    assert remove_artifacts(base) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_finalize_opens_pdf_and_cleans_up(tmp_path, opener):
    """Test finalize opens the PDF then removes by-products."""
    base = tmp_path / "grid"
    _touch_outputs(base)

    pdf_path = await finalize(base, opener=opener, keep_artifacts=False)

    assert pdf_path == Path(f"{base}.pdf")
    assert opener.opened == [pdf_path]
    assert not (tmp_path / "grid.aux").exists()
    assert not (tmp_path / "grid.log").exists()
    assert (tmp_path / "grid.tex").exists()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_finalize_without_artifacts_succeeds(tmp_path, opener):
    """Test finalize when no .aux or .log was produced."""
    base = tmp_path / "grid"
    _touch_outputs(base, extensions=(".pdf",))

    await finalize(base, opener=opener, keep_artifacts=False)

    assert len(opener.opened) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_finalize_cleans_up_when_open_fails(tmp_path, failing_opener):
    """Test that cleanup still runs when opening fails."""
    base = tmp_path / "grid"
    _touch_outputs(base)

    with pytest.raises(DocumentOpenError) as exc_info:
        await finalize(base, opener=failing_opener, keep_artifacts=False)

    assert exc_info.value.kind == "open"
    assert not (tmp_path / "grid.aux").exists()
    assert not (tmp_path / "grid.log").exists()
    assert (tmp_path / "grid.pdf").exists()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_finalize_keep_artifacts(tmp_path, opener):
    """Test that keep_artifacts leaves by-products in place."""
    base = tmp_path / "grid"
    _touch_outputs(base)

    await finalize(base, opener=opener, keep_artifacts=True)

    assert (tmp_path / "grid.aux").exists()
    assert (tmp_path / "grid.log").exists()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_open_document_missing_file(tmp_path):
    """Test opening a PDF that does not exist."""
    with pytest.raises(DocumentOpenError, match="file not found"):
        await open_document(tmp_path / "grid.pdf", viewer="true")


@posix_only
@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.skipif(shutil.which("true") is None, reason="true not available")
async def test_open_document_with_viewer(tmp_path):
    """Test opening with a viewer that exits cleanly."""
    pdf = tmp_path / "grid.pdf"
    pdf.write_text("%PDF-1.4")

    await open_document(pdf, viewer="true")


@posix_only
@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.skipif(shutil.which("false") is None, reason="false not available")
async def test_open_document_viewer_failure(tmp_path):
    """Test that a non-zero viewer exit is an open failure."""
    pdf = tmp_path / "grid.pdf"
    pdf.write_text("%PDF-1.4")

    with pytest.raises(DocumentOpenError, match="exited with status 1"):
        await open_document(pdf, viewer="false")


@posix_only
@pytest.mark.unit
@pytest.mark.asyncio
async def test_open_document_viewer_not_installed(tmp_path):
    """Test that a missing viewer binary is an open failure."""
    pdf = tmp_path / "grid.pdf"
    pdf.write_text("%PDF-1.4")

    with pytest.raises(DocumentOpenError, match="cannot launch"):
        await open_document(pdf, viewer=str(tmp_path / "no-such-viewer"))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_open_document_malformed_viewer_command(tmp_path):
    """Test that an unparseable viewer command is reported as an open failure."""
    pdf = tmp_path / "grid.pdf"
    pdf.write_text("%PDF-1.4")

    with pytest.raises(DocumentOpenError, match="invalid viewer command") as exc_info:
        await open_document(pdf, viewer='zathura "--fork')

    assert exc_info.value.kind == "open"
    assert exc_info.value.path == pdf


@pytest.mark.unit
@pytest.mark.asyncio
async def test_finalize_malformed_viewer_still_cleans_up(tmp_path):
    """Test that cleanup runs when the viewer command cannot be parsed."""
    base = tmp_path / "grid"
    _touch_outputs(base)

    async def open_with_bad_viewer(path):
        await open_document(path, viewer='zathura "--fork')

    with pytest.raises(DocumentOpenError, match="invalid viewer command"):
        await finalize(base, opener=open_with_bad_viewer, keep_artifacts=False)

    assert not (tmp_path / "grid.aux").exists()
    assert not (tmp_path / "grid.log").exists()
