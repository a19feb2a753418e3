"""
Bin registry API endpoints.
"""
from typing import Any, List

from fastapi import APIRouter, Body

from bin_tracker.api.dependencies import RegistryDep
from bin_tracker.api.models import ApiResponse, BinResponse
from bin_tracker.api.response_utils import success_response, bad_request_error, not_found_error
from bin_tracker.registry import EmptyRegistry, NotFound, ValidationError
from bin_tracker.utils.logging import get_logger, log_api_error

logger = get_logger(__name__)

router = APIRouter(prefix="/bins", tags=["bins"])


def _bins_payload(bins) -> List[dict]:
    return [b.to_dict() for b in bins]


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[List[BinResponse]],
    response_model_exclude_none=True,
)
def add_bins(registry: RegistryDep, payload: Any = Body(...)):
    """Add one bin (``{"location": ...}``) or a batch (array of such objects)."""
    items = payload if isinstance(payload, list) else [payload]
    locations = [item.get("location") if isinstance(item, dict) else None for item in items]
    try:
        created = registry.create_many(locations)
    except ValidationError as e:
        log_api_error(logger, "add bins", e, {"items": len(items)})
        raise bad_request_error(str(e))
    return success_response(_bins_payload(created), f"{len(created)} bins added successfully")


@router.get("", response_model=ApiResponse[List[BinResponse]], response_model_exclude_none=True)
def list_bins(registry: RegistryDep):
    bins = registry.list_all()
    if not bins:
        return success_response([], "No bins available")
    return success_response(_bins_payload(bins), f"Retrieved {len(bins)} bins")


@router.post(
    "/collect-sensor-data",
    response_model=ApiResponse[List[BinResponse]],
    response_model_exclude_none=True,
)
def collect_sensor_data(registry: RegistryDep):
    """Simulate a sensor sweep: random fill levels for every bin."""
    try:
        bins = registry.collect_sensor_data()
    except EmptyRegistry as e:
        raise not_found_error(str(e))
    return success_response(_bins_payload(bins), "Sensor data collected and updated")


@router.get("/{bin_id}", response_model=ApiResponse[BinResponse], response_model_exclude_none=True)
def get_bin(bin_id: int, registry: RegistryDep):
    try:
        found = registry.get_by_id(bin_id)
    except NotFound as e:
        raise not_found_error(str(e))
    return success_response(found.to_dict(), f"Retrieved bin with ID {bin_id}")


@router.put("/{bin_id}", response_model=ApiResponse[BinResponse], response_model_exclude_none=True)
def update_bin(bin_id: int, registry: RegistryDep, payload: Any = Body(...)):
    """Partially update a bin; only ``location``, ``fillLevel`` and ``needsCollection`` are applied."""
    try:
        updated = registry.update(bin_id, payload)
    except ValidationError as e:
        log_api_error(logger, "update bin", e, {"bin_id": bin_id})
        raise bad_request_error(str(e))
    except NotFound as e:
        raise not_found_error(str(e))
    return success_response(updated.to_dict(), f"Bin with ID {bin_id} updated successfully")


@router.delete("/{bin_id}", response_model=ApiResponse, response_model_exclude_none=True)
def delete_bin(bin_id: int, registry: RegistryDep):
    if not registry.delete_by_id(bin_id):
        raise not_found_error(f"Bin with ID {bin_id} not found")
    return success_response(message=f"Bin with ID {bin_id} deleted successfully")
