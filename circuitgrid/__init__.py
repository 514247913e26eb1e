"""
circuitgrid - CircuiTikZ grid and symbol sheet generator

Turns a small scene description (grid size + placed circuit symbols) into a
standalone LaTeX document, compiles it to PDF and opens the result.

Architecture:
- Scene Context: Grid and component data model, input validation
- Templating Context: Scene to LaTeX markup via Jinja2 templates
- Rendering Context: LaTeX compilation, opening the PDF, artifact cleanup
- Generation Context: Pipeline orchestration and the form session reducer
"""

__version__ = "0.1.0"
