"""Preview and edit endpoints for the API."""

from fastapi import APIRouter, status

from server.models import EditRequest, ErrorResponse, PreviewRequest, PreviewResponse
from server.preview_processor import process_edit, process_preview

router = APIRouter()

COMMON_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": ErrorResponse},
}


@router.post(
    "/api/preview",
    response_model=PreviewResponse,
    response_model_exclude_none=True,
    responses=COMMON_RESPONSES,
)
async def api_preview(preview_request: PreviewRequest) -> PreviewResponse:
    """Render an agreement structure for print.

    **Hydrates the persisted structure (falling back to the default skeleton
    when it cannot be decoded), renumbers it and returns its markup and page
    partition.**

    **Parameters**

    - **preview_request** (`PreviewRequest`): structure, type tag, city and signers

    **Returns**

    - **PreviewResponse**: markup, normalized structure, pages and print projection

    """
    return process_preview(preview_request)


@router.post(
    "/api/edit",
    response_model=PreviewResponse,
    response_model_exclude_none=True,
    responses=COMMON_RESPONSES,
)
async def api_edit(edit_request: EditRequest) -> PreviewResponse:
    """Apply one tree operation to an agreement structure.

    **Stale node ids and out-of-range item indices are ignored; the response
    then reports ``changed: false`` and the unchanged structure.**

    **Parameters**

    - **edit_request** (`EditRequest`): structure plus the operation to apply

    **Returns**

    - **PreviewResponse**: the updated structure and its projections

    **Raises**

    - **ErrorResponse**: **400** - the operation is missing a required field
    - **ErrorResponse**: **413** - the structure exceeds the node limit

    """
    return process_edit(edit_request)

