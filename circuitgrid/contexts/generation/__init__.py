"""
Generation Context

Responsibilities:
- Sequences render -> compile -> open/cleanup for one request
- Converts every failure into a single GenerationOutcome
- Holds the form session reducer used by front ends

Owns: Pipeline orchestration, request/response lifecycle
Never: Builds LaTeX itself, talks to the compiler directly
"""

from circuitgrid.contexts.generation.pipeline import GenerationOutcome, PipelineStage, generate
from circuitgrid.contexts.generation.session import FormState, RunGeneration, reduce, run_effect

__all__ = [
    "FormState",
    "GenerationOutcome",
    "PipelineStage",
    "RunGeneration",
    "generate",
    "reduce",
    "run_effect",
]
