"""
Scene Context

Responsibilities:
- Defines the component kinds that can be placed on a grid
- Holds grid dimensions and placed components for one generate request
- Validates dimensions and coordinates before anything touches the filesystem
- Parses raw form text, component specs and YAML scene files

Owns: Scene data model, input validation
Never: Renders markup, runs processes, writes files
"""

from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.loader import load_scene, parse_component_spec, parse_kind
from circuitgrid.contexts.scene.models import ComponentKind, PlacedComponent, Scene

__all__ = [
    "ComponentKind",
    "PlacedComponent",
    "Scene",
    "SceneValidationError",
    "load_scene",
    "parse_component_spec",
    "parse_kind",
]
