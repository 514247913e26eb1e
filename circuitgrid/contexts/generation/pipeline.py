"""
Generation Pipeline

Runs one generate request end to end:
validate scene -> render LaTeX -> compile -> open PDF and clean up.

Every failure is terminal for the run and is reported as a single
GenerationOutcome; nothing is retried. There is no locking: two runs against
the same base name at once will race on the same files.
"""

import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from circuitgrid.contexts.generation.logger import _log_debug, _log_error, _log_info, _log_success
from circuitgrid.contexts.rendering.compiler import COMPILE_TIMEOUT_S, compile_source
from circuitgrid.contexts.rendering.exceptions import GenerationError
from circuitgrid.contexts.rendering.opener import KEEP_LATEX_ARTIFACTS, Opener, finalize
from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.models import Scene
from circuitgrid.contexts.templating.renderer import SceneRenderer, default_renderer

load_dotenv()
OUTPUT_BASE_NAME = os.getenv("OUTPUT_BASE_NAME", "grid")

SUCCESS_MESSAGE = "PDF generated and opened successfully."


class PipelineStage(str, Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    COMPILING = "compiling"
    OPENING = "opening"
    DONE = "done"


@dataclass(frozen=True)
class GenerationOutcome:
    """
    Result of one pipeline run.

    Attributes:
        success: Whether the PDF was produced and opened
        message: Human-readable status for the caller to display
        stage: DONE on success, otherwise the stage that failed
        error_kind: Failure category tag ("validation", "io", "spawn",
                    "compile", "timeout", "open"), None on success
        pdf_path: Path of the opened PDF (None on failure)
        elapsed_s: Wall-clock duration of the run
    """

    success: bool
    message: str
    stage: PipelineStage = PipelineStage.DONE
    error_kind: Optional[str] = None
    pdf_path: Optional[Path] = None
    elapsed_s: float = 0.0

    @classmethod
    def ok(cls, pdf_path: Path, elapsed_s: float = 0.0) -> "GenerationOutcome":
        return cls(success=True, message=SUCCESS_MESSAGE, pdf_path=pdf_path, elapsed_s=elapsed_s)

    @classmethod
    def failed(
        cls, message: str, error_kind: str, stage: PipelineStage, elapsed_s: float = 0.0
    ) -> "GenerationOutcome":
        return cls(
            success=False,
            message=message,
            stage=stage,
            error_kind=error_kind,
            elapsed_s=elapsed_s,
        )

    @property
    def document_produced(self) -> bool:
        """True when a PDF exists, even if it could not be shown."""
        return self.success or self.stage == PipelineStage.OPENING


async def generate(
    scene: Scene,
    base_name: Union[str, Path] = OUTPUT_BASE_NAME,
    *,
    compiler: Optional[str] = None,
    opener: Optional[Opener] = None,
    timeout_s: Optional[float] = COMPILE_TIMEOUT_S,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    renderer: Optional[SceneRenderer] = None,
) -> GenerationOutcome:
    """
    Render, compile and open a scene as a PDF.

    The scene is only read. Validation runs before any file is written.

    Args:
        scene: Grid and components to draw
        base_name: Stem for <base>.tex / .pdf / .aux / .log
        compiler: LaTeX compiler binary (default: LATEX_COMPILER env)
        opener: Coroutine function used to open the PDF (default: platform viewer)
        timeout_s: Optional compiler timeout in seconds
        keep_artifacts: Keep .aux/.log after the run
        renderer: Scene renderer (default: shared renderer over packaged templates)

    Returns:
        GenerationOutcome; this function does not raise for pipeline failures
    """
    renderer = renderer or default_renderer()
    start_time = time.time()
    stage = PipelineStage.RENDERING
    _log_info(f"Generating {base_name}: {scene.width}x{scene.height} grid, {len(scene.components)} components")

    try:
        _log_debug(f"Stage: {stage.value}")
        header, body = renderer.render(scene)

        stage = PipelineStage.COMPILING
        _log_debug(f"Stage: {stage.value}")
        await compile_source(header, body, base_name, compiler=compiler, timeout_s=timeout_s)

        stage = PipelineStage.OPENING
        _log_debug(f"Stage: {stage.value}")
        pdf_path = await finalize(base_name, opener=opener, keep_artifacts=keep_artifacts)
    except (SceneValidationError, GenerationError) as e:
        elapsed = time.time() - start_time
        _log_error(f"Failed while {stage.value} ({e.kind}): {e.message}")
        return GenerationOutcome.failed(e.message, e.kind, stage, elapsed_s=elapsed)

    elapsed = time.time() - start_time
    _log_success(f"{pdf_path} ready ({elapsed:.2f}s)")
    return GenerationOutcome.ok(pdf_path, elapsed_s=elapsed)
