"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import List, Optional


class GenerationError(Exception):
    """
    Base class for failures while producing or displaying a document.

    Every subclass carries a short `kind` tag so callers can branch on the
    failure category without parsing the message.

    Attributes:
        message: Human-readable description shown to the user
        path: File the failure relates to, if any
    """

    kind = "generation"

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class SourceWriteError(GenerationError):
    """Raised when the .tex source cannot be written (permissions, disk full, bad path)."""

    kind = "io"

    def __init__(self, path: Path, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"Failed to write LaTeX file: {original_error}", path=path)


class ProcessSpawnError(GenerationError):
    """Raised when the compiler process cannot be started (binary missing, not executable)."""

    kind = "spawn"

    def __init__(self, compiler: str, original_error: Exception):
        self.compiler = compiler
        self.original_error = original_error
        super().__init__(f"Failed to run {compiler}: {original_error}")


class CompileFailedError(GenerationError):
    """
    Raised when the compiler ran but exited with a non-zero status.

    The message stays generic. Errors parsed from the compiler's .log file are
    kept on `errors` for logging, never shown in the message.

    Attributes:
        returncode: Compiler exit status
        errors: LaTeX errors parsed from the log file (may be empty)
    """

    kind = "compile"

    def __init__(
        self,
        compiler: str,
        returncode: int,
        tex_path: Optional[Path] = None,
        errors: Optional[List[str]] = None,
    ):
        self.compiler = compiler
        self.returncode = returncode
        self.errors = errors or []
        super().__init__(f"{compiler} failed to compile the LaTeX code.", path=tex_path)


class CompileTimeoutError(GenerationError):
    """Raised when the compiler does not finish within the configured timeout."""

    kind = "timeout"

    def __init__(self, compiler: str, timeout_s: float, tex_path: Optional[Path] = None):
        self.compiler = compiler
        self.timeout_s = timeout_s
        super().__init__(f"{compiler} did not finish within {timeout_s:g}s.", path=tex_path)


class DocumentOpenError(GenerationError):
    """Raised when the compiled PDF cannot be opened in the platform viewer."""

    kind = "open"

    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Failed to open PDF: {reason}", path=path)
