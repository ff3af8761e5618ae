from .base_client import (
    BaseRailwayClient,
    RailwayAPIError,
    RailwayClientError,
    RailwayResponseError,
    RailwayTransportError,
)
from .railway_client import RailwayClient

__all__ = [
    "BaseRailwayClient",
    "RailwayAPIError",
    "RailwayClient",
    "RailwayClientError",
    "RailwayResponseError",
    "RailwayTransportError",
]
