"""
Scene loading from YAML files and command-line component specs.

Scene file format:

    width: 10
    height: 10
    components:
      - kind: nmos
        x: 5
        y: 5
"""

import re
from pathlib import Path

from omegaconf import OmegaConf

from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.models import ComponentKind, PlacedComponent, Scene

# "<kind>:<x>,<y>", e.g. "nmos:5,5"
COMPONENT_SPEC_PATTERN = re.compile(r"^\s*(?P<kind>\w+)\s*:\s*(?P<x>[^,]+),(?P<y>.+)$")


def parse_kind(tag: str) -> ComponentKind:
    """
    Look up a component kind by its tag (case-insensitive).

    Raises:
        SceneValidationError: If no kind has this tag
    """
    try:
        return ComponentKind(str(tag).strip().lower())
    except ValueError:
        raise SceneValidationError(
            f"Unknown component kind '{tag}'. Valid kinds: {', '.join(ComponentKind.choices())}",
            field="kind",
            value=tag,
        ) from None


def parse_component_spec(spec: str) -> PlacedComponent:
    """
    Parse a "<kind>:<x>,<y>" component spec.

    Raises:
        SceneValidationError: If the spec is malformed
    """
    match = COMPONENT_SPEC_PATTERN.match(spec)
    if match is None:
        raise SceneValidationError(
            f"Invalid component spec '{spec}'. Expected <kind>:<x>,<y> (e.g. nmos:5,5)",
            field="component",
            value=spec,
        )
    kind = parse_kind(match.group("kind"))
    return PlacedComponent.from_inputs(kind, match.group("x"), match.group("y"))


def load_scene(scene_path: Path) -> Scene:
    """
    Load a scene from a YAML file.

    The returned scene is not validated; the pipeline does that.

    Raises:
        FileNotFoundError: If the file does not exist
        SceneValidationError: If required keys are missing or a kind is unknown
    """
    scene_path = Path(scene_path)
    if not scene_path.exists():
        raise FileNotFoundError(f"Scene file not found: {scene_path}")

    data = OmegaConf.to_container(OmegaConf.load(scene_path), resolve=True)
    if not isinstance(data, dict):
        raise SceneValidationError(f"Scene file must contain a mapping: {scene_path}")

    for key in ("width", "height"):
        if key not in data:
            raise SceneValidationError(f"Scene file is missing '{key}': {scene_path}", field=key)

    scene = Scene(width=data["width"], height=data["height"])
    for i, entry in enumerate(data.get("components") or []):
        try:
            kind, x, y = entry["kind"], entry["x"], entry["y"]
        except (KeyError, TypeError):
            raise SceneValidationError(
                f"Component {i} in {scene_path} needs 'kind', 'x' and 'y'",
                field=f"components[{i}]",
                value=entry,
            ) from None
        scene.add_component(parse_kind(kind), x, y)

    return scene
