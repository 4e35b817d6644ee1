"""Climate FieldView API client.

Each operation makes a single request with a fresh client and returns the
decoded JSON body. Failures are mapped onto the ClimateError hierarchy.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from climatecom.core.config import Settings
from climatecom.core.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
TIMEOUT_SECONDS = 30

# =============================================================================
# Endpoints
# =============================================================================

FIELDS_PATH = "/v4/fields"
FARMS_PATH = "/v4/farms"
BOUNDARIES_PATH = "/v4/boundaries"
HARVEST_PATH = "/v4/activitySummaries/harvest"
PLANTING_PATH = "/v4/activitySummaries/planting"

# Fixed messages for statuses that don't depend on the response body
STATUS_ERRORS = {
    401: (AuthenticationError, "Authentication failed. Check your API key."),
    403: (PermissionDeniedError, "Access forbidden. Check your API permissions."),
    404: (NotFoundError, "Resource not found."),
    429: (RateLimitError, "Rate limit exceeded. Please wait before retrying."),
}

NO_RESPONSE_MESSAGE = "No response from Climate FieldView API. Check your internet connection."


# =============================================================================
# Request plumbing
# =============================================================================


def _headers(settings: Settings) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.api_key}",
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def _decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to raw text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(body: Any) -> str:
    """Pick the most useful message out of an error response body.

    Prefers `message`, then `error`, then the whole body as a string.
    """
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message:
            return message
        if message:
            return json.dumps(message)
    if isinstance(body, str):
        return body
    return json.dumps(body)


def raise_for_status(response: httpx.Response) -> None:
    """Raise the ClimateError matching a non-2xx response."""
    if response.is_success:
        return

    status = response.status_code
    if status in STATUS_ERRORS:
        error_cls, message = STATUS_ERRORS[status]
        raise error_cls(message)

    body = _decode_body(response)
    raise ApiError(status, error_message(body), body)


async def request(
    settings: Settings,
    method: str,
    path: str,
    params: dict | None = None,
    body: dict | None = None,
) -> Any:
    """Make one authenticated request and return the decoded JSON body.

    Raises:
        AuthenticationError, PermissionDeniedError, NotFoundError,
        RateLimitError: For 401, 403, 404 and 429 responses
        ApiError: For any other non-2xx response
        NetworkError: If no response was received
    """
    logger.debug("%s %s%s params=%s", method, settings.base_url, path, params)

    async with httpx.AsyncClient(
        base_url=settings.base_url,
        headers=_headers(settings),
        timeout=TIMEOUT_SECONDS,
        follow_redirects=True,
    ) as client:
        try:
            response = await client.request(method, path, params=params, json=body)
        except httpx.RequestError as e:
            logger.debug("Request failed: %r", e)
            raise NetworkError(NO_RESPONSE_MESSAGE) from e

    logger.debug("Response %s from %s", response.status_code, response.url)
    raise_for_status(response)

    data = _decode_body(response)
    return {} if data is None else data


async def _list(settings: Settings, path: str, limit: int) -> Any:
    return await request(settings, "GET", path, params={"limit": limit})


async def _get(settings: Settings, path: str, resource_id: str) -> Any:
    return await request(settings, "GET", f"{path}/{quote(str(resource_id), safe='')}")


# =============================================================================
# Fields
# =============================================================================


async def list_fields(settings: Settings, limit: int = DEFAULT_LIMIT) -> Any:
    """List fields."""
    return await _list(settings, FIELDS_PATH, limit)


async def get_field(settings: Settings, field_id: str) -> dict:
    """Fetch a single field by ID."""
    return await _get(settings, FIELDS_PATH, field_id)


async def create_field(
    settings: Settings,
    name: str,
    acres: float | None = None,
    boundary: dict | None = None,
) -> dict:
    """
    Create a new field.

    Args:
        settings: Loaded CLI settings
        name: Field name
        acres: Optional field size in acres
        boundary: Optional GeoJSON geometry for the field

    Returns:
        The created field as returned by the API
    """
    payload: dict[str, Any] = {"name": name}
    if acres is not None:
        payload["acres"] = acres
    if boundary is not None:
        payload["boundary"] = boundary
    return await request(settings, "POST", FIELDS_PATH, body=payload)


# =============================================================================
# Farms
# =============================================================================


async def list_farms(settings: Settings, limit: int = DEFAULT_LIMIT) -> Any:
    return await _list(settings, FARMS_PATH, limit)


async def get_farm(settings: Settings, farm_id: str) -> dict:
    return await _get(settings, FARMS_PATH, farm_id)


# =============================================================================
# Boundaries
# =============================================================================


async def list_boundaries(settings: Settings, limit: int = DEFAULT_LIMIT) -> Any:
    return await _list(settings, BOUNDARIES_PATH, limit)


async def get_boundary(settings: Settings, boundary_id: str) -> dict:
    return await _get(settings, BOUNDARIES_PATH, boundary_id)


# =============================================================================
# Activity summaries
# =============================================================================


async def list_harvest_activities(settings: Settings, limit: int = DEFAULT_LIMIT) -> Any:
    """List harvest activity summaries."""
    return await _list(settings, HARVEST_PATH, limit)


async def get_harvest_activity(settings: Settings, activity_id: str) -> dict:
    return await _get(settings, HARVEST_PATH, activity_id)


async def list_planting_activities(settings: Settings, limit: int = DEFAULT_LIMIT) -> Any:
    """List planting activity summaries."""
    return await _list(settings, PLANTING_PATH, limit)


async def get_planting_activity(settings: Settings, activity_id: str) -> dict:
    return await _get(settings, PLANTING_PATH, activity_id)
