"""
LaTeX Renderer

Converts a Scene into a standalone CircuiTikZ document (preamble + body).
"""

from functools import lru_cache
from typing import List, Tuple

from circuitgrid.contexts.scene.models import PlacedComponent, Scene
from circuitgrid.contexts.templating.logger import _log_debug
from circuitgrid.contexts.templating.registries import SymbolTemplateRegistry

BEGIN_DOCUMENT = r"\begin{document}"
END_DOCUMENT = r"\end{document}"


class SceneRenderer:
    """Renders scenes to LaTeX using the symbol template registry."""

    def __init__(self, registry: SymbolTemplateRegistry = None):
        self.registry = registry or SymbolTemplateRegistry()
        # Every ComponentKind must be drawable before any scene is rendered
        self.registry.verify_complete()

    def render_header(self) -> str:
        """Render the fixed document preamble (independent of scene contents)."""
        return self.registry.get_structure_template("preamble").render().rstrip("\n")

    def render_component(self, component: PlacedComponent) -> str:
        """Render the draw instruction for one placed component."""
        template = self.registry.get_symbol_template(component.kind)
        return template.render(x=component.x, y=component.y).rstrip("\n")

    def render_body(self, scene: Scene) -> str:
        """
        Render the document body: background grid then one instruction per component.

        Args:
            scene: A validated scene

        Returns:
            The circuitikz environment as LaTeX text
        """
        instructions: List[str] = [self.render_component(c) for c in scene.components]
        body = self.registry.get_structure_template("body").render(
            width=scene.width,
            height=scene.height,
            instructions="\n".join(instructions),
        )
        return body.rstrip("\n")

    def render(self, scene: Scene) -> Tuple[str, str]:
        """
        Render a scene to (header, body).

        Raises:
            SceneValidationError: If the scene is invalid
        """
        scene.validate()
        _log_debug(
            f"Rendering {scene.width}x{scene.height} grid with {len(scene.components)} components"
        )
        return self.render_header(), self.render_body(scene)


@lru_cache(maxsize=1)
def default_renderer() -> SceneRenderer:
    """Shared renderer over the packaged templates."""
    return SceneRenderer()


def render(scene: Scene) -> Tuple[str, str]:
    """Render a scene to (header, body) with the default renderer."""
    return default_renderer().render(scene)


def assemble_document(header: str, body: str) -> str:
    """
    Wrap preamble and body into a complete LaTeX source file.

    Args:
        header: Document preamble (\\documentclass, \\usepackage, ...)
        body: Content placed between \\begin{document} and \\end{document}

    Returns:
        Full document text, newline-terminated
    """
    return f"{header}\n{BEGIN_DOCUMENT}\n{body}\n{END_DOCUMENT}\n"
