"""API routes for building, compiling and evaluating prompt states.

Every endpoint is a pure computation over the posted snapshot; nothing is
stored server-side.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from promptmaker.compiler import compile_prompt
from promptmaker.evaluation import evaluate_prompt
from promptmaker.models.evaluation import EvaluationReport
from promptmaker.models.prompt_state import PromptState
from promptmaker.state import PromptCommand, apply_command, create_default

router = APIRouter()


# --- Request/Response Models ---


class ApplyCommandRequest(BaseModel):
    """Request body for applying one edit to a snapshot."""

    state: PromptState
    command: PromptCommand


class WorkspaceView(BaseModel):
    """A snapshot together with everything derived from it."""

    state: PromptState
    compiled_prompt: str
    evaluation: EvaluationReport


class CompiledPrompt(BaseModel):
    """Compiled prompt text."""

    prompt: str


def build_workspace_view(state: PromptState) -> WorkspaceView:
    return WorkspaceView(
        state=state,
        compiled_prompt=compile_prompt(state),
        evaluation=evaluate_prompt(state),
    )


# --- API Endpoints ---


@router.get("/state/default", response_model=WorkspaceView)
def get_default_state() -> WorkspaceView:
    """Fresh blank workspace: one empty variable and one empty workflow stage."""
    return build_workspace_view(create_default())


@router.post("/state/apply", response_model=WorkspaceView)
def apply_state_command(request: ApplyCommandRequest) -> WorkspaceView:
    """Apply an edit command and return the new snapshot with its outputs."""
    new_state = apply_command(request.state, request.command)
    return build_workspace_view(new_state)


@router.post("/prompts/compile", response_model=CompiledPrompt)
def compile_state(state: PromptState) -> CompiledPrompt:
    """Compile a snapshot into prompt text."""
    return CompiledPrompt(prompt=compile_prompt(state))


@router.post("/prompts/evaluate", response_model=EvaluationReport)
def evaluate_state(state: PromptState) -> EvaluationReport:
    """Score a snapshot against the quality rubric."""
    return evaluate_prompt(state)
