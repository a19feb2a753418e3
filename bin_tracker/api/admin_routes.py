"""
Snapshot administration endpoints.
"""
from fastapi import APIRouter

from bin_tracker.api.dependencies import RegistryDep
from bin_tracker.api.models import ApiResponse
from bin_tracker.api.response_utils import success_response, internal_server_error
from bin_tracker.registry import IOFailure
from bin_tracker.utils.logging import get_logger, log_api_error, log_api_success

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/load-data", response_model=ApiResponse, response_model_exclude_none=True)
def load_data(registry: RegistryDep):
    """Replace the registry with the snapshot file; a corrupt file yields an empty registry."""
    count = registry.reload()
    log_api_success(logger, "load snapshot", {"bins": count})
    return success_response(message=f"Successfully loaded {count} bins from file")


@router.post("/save-data", response_model=ApiResponse, response_model_exclude_none=True)
def save_data(registry: RegistryDep):
    try:
        count = registry.save()
    except IOFailure as e:
        log_api_error(logger, "save snapshot", e)
        raise internal_server_error("Failed to save bins to file", str(e))
    log_api_success(logger, "save snapshot", {"bins": count})
    return success_response(message=f"Successfully saved {count} bins to file")
