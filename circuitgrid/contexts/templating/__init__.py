"""
Templating Context

Responsibilities:
- Maps each component kind to its CircuiTikZ draw-instruction template
- Renders a scene to a LaTeX preamble and body
- Assembles the complete document source

Owns: Jinja2 templates, scene to LaTeX conversion
Never: Writes files, runs the compiler
"""

from circuitgrid.contexts.templating.renderer import (
    SceneRenderer,
    assemble_document,
    default_renderer,
    render,
)

__all__ = ["SceneRenderer", "assemble_document", "default_renderer", "render"]
