"""Form submission endpoint."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from design_request.deps import get_handler
from design_request.models import SubmitErrorResponse, SubmitResponse
from design_request.service import SubmissionHandler

router = APIRouter(prefix="/api", tags=["forms"])


@router.post(
    "/submit-form",
    response_model=SubmitResponse,
    responses={500: {"model": SubmitErrorResponse}},
)
async def submit_form(
    payload: Annotated[Any, Body()],
    handler: Annotated[SubmissionHandler, Depends(get_handler)],
):
    """Render the design request and email it to the design office.

    Validation happens inside the handler so malformed submissions get the
    localized failure body instead of FastAPI's default 422.
    """
    status_code, body = await handler.handle(payload)
    return JSONResponse(body, status_code=status_code)
