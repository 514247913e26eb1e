"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Iterable, Optional


class MissingSymbolTemplateError(LookupError):
    """
    Exception raised when a component kind has no symbol template.

    Raised when the renderer is built, so a new kind without a template
    fails immediately instead of in the middle of a render.

    Attributes:
        kinds: Tags of the kinds that have no template
        symbols_path: Directory that was searched
    """

    def __init__(self, kinds: Iterable[str], symbols_path: Optional[Path] = None):
        self.kinds = sorted(kinds)
        self.symbols_path = symbols_path

        parts = [f"No symbol template for component kind(s): {', '.join(self.kinds)}"]
        if symbols_path is not None:
            parts.append(f"Expected <kind>.tex.jinja files in: {symbols_path}")

        super().__init__("\n".join(parts))
