"""Core module - configuration, errors and API client."""

from climatecom.core import client
from climatecom.core.client import (
    create_field,
    get_boundary,
    get_farm,
    get_field,
    get_harvest_activity,
    get_planting_activity,
    list_boundaries,
    list_farms,
    list_fields,
    list_harvest_activities,
    list_planting_activities,
)
from climatecom.core.config import ConfigStore, Settings, get_config_dir
from climatecom.core.errors import (
    ApiError,
    AuthenticationError,
    ClimateError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from climatecom.core.records import Envelope, EnvelopeKind, decode_envelope, extract_records
from climatecom.core.result import ApiResult, capture

__all__ = [
    "client",
    "ConfigStore",
    "Settings",
    "get_config_dir",
    "ApiResult",
    "capture",
    "Envelope",
    "EnvelopeKind",
    "decode_envelope",
    "extract_records",
    # Errors
    "ClimateError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
    "ApiError",
    "NetworkError",
    "ConfigurationError",
    # Operations
    "list_fields",
    "get_field",
    "create_field",
    "list_farms",
    "get_farm",
    "list_boundaries",
    "get_boundary",
    "list_harvest_activities",
    "get_harvest_activity",
    "list_planting_activities",
    "get_planting_activity",
]
