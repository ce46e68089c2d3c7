"""Position and reverse geocoding collaborators."""

from .nominatim import NominatimClient, format_address
from .provider import PositionUnavailableError, ReportedPositionProvider

__all__ = ["NominatimClient", "format_address", "PositionUnavailableError", "ReportedPositionProvider"]
