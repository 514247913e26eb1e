"""
Scene data structures.

A scene is the complete description of one document: grid dimensions plus an
ordered list of circuit symbols anchored at integer grid coordinates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from circuitgrid.contexts.scene.exceptions import SceneValidationError


class ComponentKind(str, Enum):
    """Circuit symbol types that can be placed on the grid."""

    NMOS = "nmos"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def choices(cls) -> List[str]:
        """Return the tag of every kind, in declaration order."""
        return [kind.value for kind in cls]


def _is_plain_int(value) -> bool:
    # bool is an int subclass but never a valid coordinate
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_int(text: str) -> int:
    """Parse form text as a base-10 integer, tolerating surrounding whitespace."""
    return int(str(text).strip(), 10)


@dataclass(frozen=True)
class PlacedComponent:
    """
    One symbol anchored at integer grid coordinates.

    Attributes:
        kind: Which symbol to draw
        x: Horizontal grid coordinate (non-negative)
        y: Vertical grid coordinate (non-negative)
    """

    kind: ComponentKind
    x: int
    y: int

    @classmethod
    def from_inputs(cls, kind: ComponentKind, x_text: str, y_text: str) -> "PlacedComponent":
        """
        Build a component from raw form text.

        Raises:
            SceneValidationError: If either coordinate is not a non-negative integer
        """
        try:
            x = _parse_int(x_text)
            y = _parse_int(y_text)
        except ValueError:
            raise SceneValidationError(
                "Invalid component coordinates", field="coordinates", value=(x_text, y_text)
            ) from None

        if x < 0 or y < 0:
            raise SceneValidationError(
                "Invalid component coordinates", field="coordinates", value=(x, y)
            )
        return cls(kind=kind, x=x, y=y)


@dataclass
class Scene:
    """
    Grid dimensions and placed components for one generate request.

    A Scene may be constructed with invalid values so the pipeline can report
    them; call validate() (the pipeline does) before rendering.

    Attributes:
        width: Grid width in units (must be > 0)
        height: Grid height in units (must be > 0)
        components: Placed symbols, in the order they were added
    """

    width: int
    height: int
    components: List[PlacedComponent] = field(default_factory=list)

    @classmethod
    def from_inputs(cls, width_text: str, height_text: str) -> "Scene":
        """
        Build an empty scene from raw form text.

        Only parses; dimension checks happen in validate().

        Raises:
            SceneValidationError: If either value is not an integer
        """
        try:
            width = _parse_int(width_text)
        except ValueError:
            raise SceneValidationError(
                "Invalid grid X coordinate", field="width", value=width_text
            ) from None
        try:
            height = _parse_int(height_text)
        except ValueError:
            raise SceneValidationError(
                "Invalid grid Y coordinate", field="height", value=height_text
            ) from None

        return cls(width=width, height=height)

    def add_component(self, kind: ComponentKind, x: int, y: int) -> PlacedComponent:
        """Append a component and return it."""
        component = PlacedComponent(kind=kind, x=x, y=y)
        self.components.append(component)
        return component

    def clear(self) -> None:
        """Remove all placed components, keeping the grid size."""
        self.components.clear()

    def validate(self) -> "Scene":
        """
        Check grid dimensions and every component.

        Returns:
            self, to allow chaining

        Raises:
            SceneValidationError: On the first invalid value found
        """
        for name, value in (("width", self.width), ("height", self.height)):
            if not _is_plain_int(value) or value <= 0:
                raise SceneValidationError(
                    f"Grid {name} must be a positive integer, got {value!r}",
                    field=name,
                    value=value,
                )

        for i, component in enumerate(self.components):
            if not isinstance(component.kind, ComponentKind):
                raise SceneValidationError(
                    f"Unknown component kind at position {i}: {component.kind!r}",
                    field=f"components[{i}].kind",
                    value=component.kind,
                )
            for axis in ("x", "y"):
                value = getattr(component, axis)
                if not _is_plain_int(value) or value < 0:
                    raise SceneValidationError(
                        f"Component {i} ({component.kind}) has invalid {axis} coordinate {value!r}",
                        field=f"components[{i}].{axis}",
                        value=value,
                    )

        return self
