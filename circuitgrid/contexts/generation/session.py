"""
Form Session Reducer

Models the input form's state as an explicit value threaded through
reduce(state, event) -> (state, effect). Front ends (the interactive CLI, or a
GUI) dispatch events and execute the returned effect; the reducer itself never
touches the filesystem.

At most one generation is in flight per session: GeneratePressed is ignored
while a run is pending.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple, Union

from circuitgrid.contexts.generation.pipeline import OUTPUT_BASE_NAME, GenerationOutcome, generate
from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.models import ComponentKind, PlacedComponent, Scene

GENERATING_MESSAGE = "Generating PDF..."


@dataclass(frozen=True)
class FormState:
    """Everything the form shows, plus the components added so far."""

    width_text: str = "10"
    height_text: str = "10"
    kind: Optional[ComponentKind] = ComponentKind.NMOS
    x_text: str = "5"
    y_text: str = "5"
    components: Tuple[PlacedComponent, ...] = ()
    message: str = ""
    is_generating: bool = False
    base_name: str = OUTPUT_BASE_NAME


# Events


@dataclass(frozen=True)
class WidthChanged:
    value: str


@dataclass(frozen=True)
class HeightChanged:
    value: str


@dataclass(frozen=True)
class KindSelected:
    kind: Optional[ComponentKind]


@dataclass(frozen=True)
class XChanged:
    value: str


@dataclass(frozen=True)
class YChanged:
    value: str


@dataclass(frozen=True)
class AddComponentPressed:
    pass


@dataclass(frozen=True)
class GeneratePressed:
    pass


@dataclass(frozen=True)
class GenerationComplete:
    outcome: GenerationOutcome


Event = Union[
    WidthChanged,
    HeightChanged,
    KindSelected,
    XChanged,
    YChanged,
    AddComponentPressed,
    GeneratePressed,
    GenerationComplete,
]


@dataclass(frozen=True)
class RunGeneration:
    """Effect: run the pipeline, then dispatch GenerationComplete with its outcome."""

    scene: Scene
    base_name: Union[str, Path] = OUTPUT_BASE_NAME


def _add_component(state: FormState) -> FormState:
    if state.kind is None:
        return replace(state, message="No component type selected")
    try:
        component = PlacedComponent.from_inputs(state.kind, state.x_text, state.y_text)
    except SceneValidationError as e:
        return replace(state, message=e.message)
    return replace(
        state,
        components=state.components + (component,),
        message=f"Added component {component.kind} at ({component.x}, {component.y})",
    )


def _start_generation(state: FormState) -> Tuple[FormState, Optional[RunGeneration]]:
    if state.is_generating:
        return state, None
    try:
        scene = Scene.from_inputs(state.width_text, state.height_text)
    except SceneValidationError as e:
        return replace(state, message=f"Error: {e.message}"), None

    scene.components.extend(state.components)
    effect = RunGeneration(scene=scene, base_name=state.base_name)
    return replace(state, is_generating=True, message=GENERATING_MESSAGE), effect


def _finish_generation(state: FormState, outcome: GenerationOutcome) -> FormState:
    if outcome.success:
        return replace(state, is_generating=False, components=(), message=outcome.message)
    return replace(state, is_generating=False, message=f"Error: {outcome.message}")


def reduce(state: FormState, event: Event) -> Tuple[FormState, Optional[RunGeneration]]:
    """
    Apply one event to the form state.

    Args:
        state: Current form state
        event: Event dispatched by the front end

    Returns:
        Tuple of (new state, effect or None)
    """
    if isinstance(event, WidthChanged):
        return replace(state, width_text=event.value), None
    elif isinstance(event, HeightChanged):
        return replace(state, height_text=event.value), None
    elif isinstance(event, KindSelected):
        return replace(state, kind=event.kind), None
    elif isinstance(event, XChanged):
        return replace(state, x_text=event.value), None
    elif isinstance(event, YChanged):
        return replace(state, y_text=event.value), None
    elif isinstance(event, AddComponentPressed):
        return _add_component(state), None
    elif isinstance(event, GeneratePressed):
        return _start_generation(state)
    elif isinstance(event, GenerationComplete):
        return _finish_generation(state, event.outcome), None

    raise TypeError(f"Unknown event: {event!r}")


async def run_effect(effect: RunGeneration, **generate_kwargs) -> GenerationComplete:
    """
    Execute a RunGeneration effect and wrap its outcome as the follow-up event.

    Args:
        effect: Effect returned by reduce()
        **generate_kwargs: Passed through to generate() (compiler, opener, ...)
    """
    outcome = await generate(effect.scene, effect.base_name, **generate_kwargs)
    return GenerationComplete(outcome=outcome)
