"""API routes for the prompt refinement proxy.

Errors keep the proxy's response shape ({"error": ...}) instead of FastAPI's
default {"detail": ...}, with the status code of the failure.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promptmaker.models.refine import RefineRequest, RefineResponse
from promptmaker.refine import RefineError, refine_prompt

router = APIRouter()


@router.post("/refine", response_model=RefineResponse, response_model_exclude_none=True)
async def refine(request: RefineRequest):
    """Forward a compiled prompt to the chosen provider for critique and rewrite."""
    try:
        return await refine_prompt(request)
    except RefineError as e:
        return JSONResponse(
            status_code=e.status_code,
            content=RefineResponse(error=e.message).model_dump(exclude_none=True),
        )
