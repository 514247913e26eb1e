"""Unit tests for YAML scene files and component specs."""

import pytest

from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.loader import load_scene, parse_component_spec, parse_kind
from circuitgrid.contexts.scene.models import ComponentKind, PlacedComponent


@pytest.mark.unit
@pytest.mark.parametrize("tag", ["nmos", "NMOS", " nmos "])
def test_parse_kind(tag):
    """Test kind lookup by tag."""
    assert parse_kind(tag) is ComponentKind.NMOS


@pytest.mark.unit
def test_parse_kind_unknown_lists_valid_kinds():
    """Test that an unknown kind lists the valid ones."""
    with pytest.raises(SceneValidationError, match="Valid kinds: nmos"):
        parse_kind("thyristor")


@pytest.mark.unit
@pytest.mark.parametrize("spec", ["nmos:5,5", "nmos: 5, 5", "NMOS:5,5"])
def test_parse_component_spec(spec):
    """Test parsing kind:x,y component specs."""
    assert parse_component_spec(spec) == PlacedComponent(ComponentKind.NMOS, 5, 5)


@pytest.mark.unit
@pytest.mark.parametrize("spec", ["nmos", "nmos:5", "5,5", ""])
def test_parse_component_spec_malformed(spec):
    """Test rejecting malformed component specs."""
    with pytest.raises(SceneValidationError, match="Invalid component spec"):
        parse_component_spec(spec)


@pytest.mark.unit
def test_load_scene(tmp_path):
    """Test loading a YAML scene with components."""
    scene_file = tmp_path / "scene.yaml"
    scene_file.write_text(
        "width: 8\n"
        "height: 6\n"
        "components:\n"
        "  - {kind: nmos, x: 2, y: 3}\n"
        "  - {kind: nmos, x: 5, y: 3}\n"
    )

    scene = load_scene(scene_file)

    assert (scene.width, scene.height) == (8, 6)
    assert scene.components == [
        PlacedComponent(ComponentKind.NMOS, 2, 3),
        PlacedComponent(ComponentKind.NMOS, 5, 3),
    ]


@pytest.mark.unit
def test_load_scene_without_components(tmp_path):
    """Test loading a YAML scene with only grid dimensions."""
    scene_file = tmp_path / "scene.yaml"
    scene_file.write_text("width: 3\nheight: 4\n")

    assert load_scene(scene_file).components == []


@pytest.mark.unit
def test_load_scene_missing_dimension(tmp_path):
    """Test that a scene file without height is rejected."""
    scene_file = tmp_path / "scene.yaml"
    scene_file.write_text("width: 3\n")

    with pytest.raises(SceneValidationError, match="missing 'height'"):
        load_scene(scene_file)


@pytest.mark.unit
def test_load_scene_incomplete_component(tmp_path):
    """Test that a component without y is rejected."""
    scene_file = tmp_path / "scene.yaml"
    scene_file.write_text("width: 3\nheight: 3\ncomponents:\n  - {kind: nmos, x: 1}\n")

    with pytest.raises(SceneValidationError, match="needs 'kind', 'x' and 'y'"):
        load_scene(scene_file)


@pytest.mark.unit
def test_load_scene_file_not_found(tmp_path):
    """Test loading a scene file that does not exist."""
    with pytest.raises(FileNotFoundError):
        load_scene(tmp_path / "nope.yaml")
