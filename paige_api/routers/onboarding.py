# paige_api/routers/onboarding.py

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from paige_api.config import Settings
from paige_api.dependencies import build_generation_pipeline, get_app_settings, get_database, get_http_client, require_database
from paige_api.models.onboarding import GeneratePlanRequest, GeneratePlanResponse, WeddingData
from paige_api.models.todos import GenerateTodosResponse
from paige_api.services.plan_persistence import PersistenceError
from paige_api.services.todo_service import generate_todos
from paige_api.utils.logger import logger

router = APIRouter(tags=["Onboarding"])

MISSING_DATA = "Missing required data"


def _has_wedding_data(wedding_data: WeddingData) -> bool:
    return wedding_data is not None and bool(wedding_data.model_fields_set or wedding_data.model_extra)


@router.get("/health")
async def health():
    return {"ok": True}


@router.post(
    "/generate-plan",
    response_model=GeneratePlanResponse,
    summary="Generate Preliminary Wedding Plan",
    description=(
        "Builds a newly onboarded user's starter plan: checklist, budget split and vendor "
        "recommendations for venues, photographers, florists, caterers and music. Upstream "
        "failures fall back to local defaults and are reported in the fallback flags."
    )
)
async def generate_plan_endpoint(
    request: GeneratePlanRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
    db=Depends(get_database),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Generate and save the preliminary plan for one user.

    Returns 400 when userId or weddingData is missing, 500 when the database is
    unavailable or a save fails, and the complete plan otherwise.
    """
    if not request.user_id or not _has_wedding_data(request.wedding_data):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_DATA)

    try:
        pipeline = build_generation_pipeline(client, require_database(db), app_settings)
        logger.info(f"[GENERATE PLAN] Starting plan generation for user {request.user_id}")
        data = await pipeline.run(request.user_id, request.wedding_data)
        return GeneratePlanResponse(success=True, data=data)

    except HTTPException as he:
        raise he
    except PersistenceError as pe:
        logger.error(f"[GENERATE PLAN] Could not save plan for user {request.user_id}: {pe}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(pe))
    except Exception as e:
        logger.error(f"[GENERATE PLAN] Error generating plan for user {request.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate preliminary content")


@router.post(
    "/generate-todos",
    response_model=GenerateTodosResponse,
    summary="Generate Starter Checklist",
)
async def generate_todos_endpoint(request: GeneratePlanRequest):
    """Starter checklist from the venue-selection or full-wedding template, with deadlines when the date is known."""
    if not request.user_id or not _has_wedding_data(request.wedding_data):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_DATA)

    try:
        wedding_data = request.wedding_data.model_dump(by_alias=True)
        return generate_todos(request.user_id, wedding_data)
    except Exception as e:
        logger.error(f"[GENERATE TODOS] Error generating todos for user {request.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate todos")
