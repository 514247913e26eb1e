#!/usr/bin/env python3
"""
CircuiTikZ Grid Generator CLI

Renders a grid with placed circuit symbols to LaTeX, compiles it to PDF and
opens the result in the default viewer.

Commands:
    generate    - Render, compile and open a scene
    render      - Print (or save) the LaTeX source without compiling
    kinds       - List the component kinds that can be placed
    interactive - Build a scene step by step at the prompt

Examples:\n

    generate_grid.py generate                                # Empty 10x10 grid -> grid.pdf

    generate_grid.py generate -x 8 -y 6 -c nmos:2,3 -c nmos:5,3

    generate_grid.py generate --scene scenes/example_nmos.yaml -o sheet

    generate_grid.py render -c nmos:5,5                      # Print LaTeX to stdout

    generate_grid.py interactive
"""

import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from circuitgrid.contexts.generation.logger import setup_generation_logger
from circuitgrid.contexts.generation.pipeline import OUTPUT_BASE_NAME, GenerationOutcome, generate
from circuitgrid.contexts.generation.session import (
    AddComponentPressed,
    FormState,
    GeneratePressed,
    HeightChanged,
    KindSelected,
    WidthChanged,
    XChanged,
    YChanged,
    reduce,
    run_effect,
)
from circuitgrid.contexts.rendering.exceptions import DocumentOpenError
from circuitgrid.contexts.scene.exceptions import SceneValidationError
from circuitgrid.contexts.scene.loader import load_scene, parse_component_spec, parse_kind
from circuitgrid.contexts.scene.models import ComponentKind, Scene
from circuitgrid.contexts.templating.renderer import assemble_document, render
from circuitgrid.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render CircuiTikZ grids with placed symbols and compile them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


async def _check_exists(path: Path) -> None:
    """Opener used with --no-open: only confirms the PDF was written."""
    if not path.exists():
        raise DocumentOpenError(path, f"file not found: {path}")


def _build_scene(
    width: int, height: int, components: Optional[List[str]], scene_file: Optional[Path]
) -> Scene:
    """Scene from --scene (if given) plus any --component specs."""
    scene = load_scene(scene_file) if scene_file else Scene(width=width, height=height)
    for spec in components or []:
        scene.components.append(parse_component_spec(spec))
    return scene


def _report(outcome: GenerationOutcome) -> None:
    if outcome.success:
        typer.secho(f"✓ {outcome.message}", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {outcome.pdf_path}")
        typer.echo(f"  Time: {outcome.elapsed_s:.2f}s")
    else:
        typer.secho(f"✗ {outcome.message}", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Failed while: {outcome.stage.value} ({outcome.error_kind})")
        if outcome.document_produced:
            typer.echo("  The PDF was compiled but could not be opened.")


# Shared option types
WidthOption = Annotated[int, typer.Option("--width", "-x", help="Grid width in units")]
HeightOption = Annotated[int, typer.Option("--height", "-y", help="Grid height in units")]
ComponentOption = Annotated[
    Optional[List[str]],
    typer.Option("--component", "-c", help="Component as <kind>:<x>,<y> (repeatable)"),
]
SceneOption = Annotated[
    Optional[Path],
    typer.Option("--scene", "-s", help="YAML scene file (overrides --width/--height)"),
]


@app.command("generate")
def generate_command(
    width: WidthOption = 10,
    height: HeightOption = 10,
    component: ComponentOption = None,
    scene_file: SceneOption = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Base name for .tex/.pdf/.aux/.log files")
    ] = OUTPUT_BASE_NAME,
    compiler: Annotated[
        Optional[str], typer.Option("--compiler", help="LaTeX compiler (default: LATEX_COMPILER env)")
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", help="Kill the compiler after this many seconds", min=0.1),
    ] = None,
    keep_artifacts: Annotated[
        bool, typer.Option("--keep-artifacts", "-k", help="Keep .aux and .log files")
    ] = False,
    no_open: Annotated[
        bool, typer.Option("--no-open", help="Compile only; do not open the PDF")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging on the console")
    ] = False,
):
    """
    Render a scene, compile it to PDF and open it.

    Examples:\n

        $ generate_grid.py generate -x 10 -y 10 -c nmos:5,5

        $ generate_grid.py generate --scene scenes/example_nmos.yaml --no-open
    """
    setup_generation_logger(LOGS_PATH / f"generate_{now()}", console_level="DEBUG" if verbose else None)

    try:
        scene = _build_scene(width, height, component, scene_file)
    except (SceneValidationError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nGenerating: {output}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Grid: {scene.width}x{scene.height}, components: {len(scene.components)}")
    typer.echo("")

    kwargs = {"compiler": compiler, "keep_artifacts": keep_artifacts}
    if timeout is not None:
        kwargs["timeout_s"] = timeout
    if no_open:
        kwargs["opener"] = _check_exists

    outcome = asyncio.run(generate(scene, output, **kwargs))

    typer.echo("")
    _report(outcome)
    typer.echo("")
    raise typer.Exit(code=0 if outcome.success else 1)


@app.command("render")
def render_command(
    width: WidthOption = 10,
    height: HeightOption = 10,
    component: ComponentOption = None,
    scene_file: SceneOption = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the .tex here instead of stdout")
    ] = None,
):
    """Print the LaTeX source for a scene without compiling it."""
    try:
        scene = _build_scene(width, height, component, scene_file)
        source = assemble_document(*render(scene))
    except (SceneValidationError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(source, nl=False)
    else:
        output.write_text(source, encoding="utf-8")
        typer.secho(f"Wrote {output}", fg=typer.colors.GREEN)


@app.command("kinds")
def kinds_command():
    """List the component kinds that can be placed."""
    for tag in ComponentKind.choices():
        typer.echo(tag)


@app.command("interactive")
def interactive_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Base name for .tex/.pdf/.aux/.log files")
    ] = OUTPUT_BASE_NAME,
    compiler: Annotated[
        Optional[str], typer.Option("--compiler", help="LaTeX compiler (default: LATEX_COMPILER env)")
    ] = None,
):
    """
    Build a scene at the prompt: set the grid, add components, generate.

    Components are cleared after each successful generation.
    """
    setup_generation_logger(LOGS_PATH / f"generate_{now()}", console_level="WARNING")
    state = FormState(base_name=output)

    def dispatch(event):
        nonlocal state
        state, effect = reduce(state, event)
        if effect is not None:
            typer.echo(state.message)
            completion = asyncio.run(run_effect(effect, compiler=compiler))
            state, _ = reduce(state, completion)

    typer.secho("\nCircuiTikZ Grid Generator", fg=typer.colors.BLUE, bold=True)
    while True:
        typer.echo(
            f"\nGrid: {state.width_text}x{state.height_text}  "
            f"Components: {len(state.components)}"
        )
        if state.message:
            color = typer.colors.RED if state.message.startswith(("Error", "Invalid")) else None
            typer.secho(state.message, fg=color)

        action = typer.prompt("[g]rid  [a]dd component  [r]un  [q]uit", default="r").strip().lower()

        if action.startswith("g"):
            dispatch(WidthChanged(typer.prompt("Grid width (X)", default=state.width_text)))
            dispatch(HeightChanged(typer.prompt("Grid height (Y)", default=state.height_text)))
        elif action.startswith("a"):
            default_kind = state.kind.value if state.kind else ComponentKind.NMOS.value
            tag = typer.prompt(f"Kind ({', '.join(ComponentKind.choices())})", default=default_kind)
            try:
                dispatch(KindSelected(parse_kind(tag)))
            except SceneValidationError as e:
                typer.secho(e.message, fg=typer.colors.RED)
                continue
            dispatch(XChanged(typer.prompt("Comp X", default=state.x_text)))
            dispatch(YChanged(typer.prompt("Comp Y", default=state.y_text)))
            dispatch(AddComponentPressed())
        elif action.startswith("r"):
            dispatch(GeneratePressed())
        elif action.startswith("q"):
            raise typer.Exit()


if __name__ == "__main__":
    app()
