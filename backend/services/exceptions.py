"""
Error taxonomy for the satellite data service.

Only InvalidCategoryError reaches the caller with its own message; every
other failure is collapsed into a generic server error by the routes.
"""
from typing import List, Optional


class SatelliteServiceError(Exception):
    """Base class for satellite data service errors."""


class InvalidCategoryError(SatelliteServiceError):
    """Category is not one of the registered upstream feeds."""

    def __init__(self, category: str, valid_categories: List[str]):
        self.category = category
        self.valid_categories = list(valid_categories)
        super().__init__(
            f"Invalid satellite category. Valid options: {', '.join(self.valid_categories)}"
        )


class UpstreamFetchError(SatelliteServiceError):
    """Fetching the upstream TLE feed failed."""

    def __init__(self, category: str, message: str):
        self.category = category
        super().__init__(message)


class UpstreamHTTPError(UpstreamFetchError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, category: str, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            category,
            f"Failed to fetch TLE data for {category}: HTTP {status_code} {reason or ''}".rstrip()
        )


class UpstreamTransportError(UpstreamFetchError):
    """Connection error, timeout or other transport failure."""
