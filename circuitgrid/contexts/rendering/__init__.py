"""
Rendering Context

Responsibilities:
- Writes the LaTeX source and compiles it to PDF
- Classifies compiler outcomes (write failure, spawn failure, compile failure)
- Opens the compiled PDF in the platform viewer
- Removes intermediate compiler files

Owns: LaTeX compilation, PDF opening, artifact cleanup
Never: Modifies template content
"""

from circuitgrid.contexts.rendering.compiler import CompilationResult, compile_source
from circuitgrid.contexts.rendering.exceptions import (
    CompileFailedError,
    CompileTimeoutError,
    DocumentOpenError,
    GenerationError,
    ProcessSpawnError,
    SourceWriteError,
)
from circuitgrid.contexts.rendering.opener import finalize, open_document, remove_artifacts

__all__ = [
    "CompilationResult",
    "CompileFailedError",
    "CompileTimeoutError",
    "DocumentOpenError",
    "GenerationError",
    "ProcessSpawnError",
    "SourceWriteError",
    "compile_source",
    "finalize",
    "open_document",
    "remove_artifacts",
]
