from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from td_device_probe.api.deps import get_client
from td_device_probe.core.config import settings
from td_device_probe.core.logging import get_logger
from td_device_probe.schemas.exploration import ExploreResponse, SearchResponse
from td_device_probe.services.exploration import explore_user_data, find_computer_name_endpoint
from td_device_probe.services.timedoctor_client import TimeDoctorClient

logger = get_logger(__name__)

router = APIRouter(prefix="/debug", tags=["debug"])

EXPLORE_EXAMPLE = "GET /debug/exploreUserData/aLfYIu7-TthUmwrm"

def is_missing_user_id(user_id: str | None) -> bool:
    return not user_id or not user_id.strip() or user_id == "undefined"

def user_id_required(example: str | None = None) -> JSONResponse:
    content = {"success": False, "error": "User ID is required"}
    if example:
        content["example"] = example
    return JSONResponse(status_code=400, content=content)

# Without a path segment the id is never taken from anywhere else.
@router.get("/exploreUserData", include_in_schema=False)
def explore_user_without_id():
    return user_id_required(EXPLORE_EXAMPLE)

@router.get("/findComputerNameEndpoint", include_in_schema=False)
def find_computer_name_without_id():
    return user_id_required()

@router.get("/exploreUserData/{user_id}", response_model=ExploreResponse, response_model_exclude_unset=True)
def explore_user(
    user_id: str,
    client: TimeDoctorClient = Depends(get_client),
):
    if is_missing_user_id(user_id):
        return user_id_required(EXPLORE_EXAMPLE)

    try:
        return explore_user_data(client, user_id, delay=settings.explore_delay_seconds)
    except Exception as e:
        logger.exception(f"Deep exploration error for {user_id}: {e}")
        return JSONResponse(status_code=500, content={
            "success": False,
            "error": str(e),
            "userId": user_id,
            "message": "Deep exploration failed",
        })

@router.get("/findComputerNameEndpoint/{user_id}", response_model=SearchResponse, response_model_exclude_unset=True)
def find_computer_name(
    user_id: str,
    client: TimeDoctorClient = Depends(get_client),
):
    if is_missing_user_id(user_id):
        return user_id_required()

    try:
        return find_computer_name_endpoint(
            client,
            user_id,
            delay=settings.search_delay_seconds,
            max_depth=settings.search_max_depth,
        )
    except Exception as e:
        logger.exception(f"Computer name search error for {user_id}: {e}")
        return JSONResponse(status_code=500, content={
            "success": False,
            "error": str(e),
            "userId": user_id,
            "message": "Computer name search failed",
        })
