"""
Templating Registries

Loads and caches the Jinja2 templates used to build LaTeX documents.
"""

import os
from pathlib import Path
from typing import Dict, Iterable, List

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from circuitgrid.contexts.scene.models import ComponentKind
from circuitgrid.contexts.templating.exceptions import MissingSymbolTemplateError

load_dotenv()
TEMPLATE_PATH = Path(
    os.getenv("CIRCUITGRID_TEMPLATE_PATH", Path(__file__).resolve().parent / "template")
)

SYMBOLS_DIR = "symbols"
STRUCTURE_DIR = "structure"
TEMPLATE_SUFFIX = ".tex.jinja"


class SymbolTemplateRegistry:
    """
    Registry mapping component kinds to Jinja2 draw-instruction templates.

    Templates live in {base_path}/symbols/{kind}.tex.jinja, document structure
    templates in {base_path}/structure/. Custom delimiters avoid conflicts with
    LaTeX braces:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, base_path: Path = None):
        """
        Initialize the template registry.

        Args:
            base_path: Root template directory. Defaults to CIRCUITGRID_TEMPLATE_PATH
                       from environment, or the packaged templates
        """
        if base_path is None:
            base_path = TEMPLATE_PATH

        self.base_path = Path(base_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.base_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Preserve whitespace (important for LaTeX)
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )

    @property
    def symbols_path(self) -> Path:
        return self.base_path / SYMBOLS_DIR

    def _load(self, relative_path: str) -> Template:
        if relative_path in self._cache:
            return self._cache[relative_path]

        try:
            template = self.env.get_template(relative_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(f"Template not found at {self.base_path / relative_path}") from e

        self._cache[relative_path] = template
        return template

    def get_symbol_template(self, kind: ComponentKind) -> Template:
        """
        Get the draw-instruction template for a component kind.

        Raises:
            MissingSymbolTemplateError: If the kind has no template file
        """
        if not self.get_symbol_template_path(kind).exists():
            raise MissingSymbolTemplateError([kind.value], self.symbols_path)
        return self._load(f"{SYMBOLS_DIR}/{kind.value}{TEMPLATE_SUFFIX}")

    def get_structure_template(self, name: str) -> Template:
        """Get a document structure template (e.g., 'preamble', 'body')."""
        return self._load(f"{STRUCTURE_DIR}/{name}{TEMPLATE_SUFFIX}")

    def get_symbol_template_path(self, kind: ComponentKind) -> Path:
        return self.symbols_path / f"{kind.value}{TEMPLATE_SUFFIX}"

    def missing_kinds(self, kinds: Iterable[ComponentKind] = ComponentKind) -> List[str]:
        """Return tags of the kinds that have no symbol template, in declaration order."""
        return [kind.value for kind in kinds if not self.get_symbol_template_path(kind).exists()]

    def verify_complete(self, kinds: Iterable[ComponentKind] = ComponentKind) -> None:
        """
        Ensure every component kind has a symbol template.

        Raises:
            MissingSymbolTemplateError: Listing every kind without a template
        """
        missing = self.missing_kinds(kinds)
        if missing:
            raise MissingSymbolTemplateError(missing, self.symbols_path)

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, relative_path: str) -> bool:
        return relative_path in self._cache
