import math

from homedash.core.modules.weather.models import Coordinates
from homedash.errors import ValidationError


def parse_coordinate(value: str | None) -> float | None:
    """Parse a query parameter as a finite number, None when missing or invalid."""
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def validate_coordinates(lat: str | None, lon: str | None) -> Coordinates:
    """Validate raw lat/lon query values.

    Raises:
        ValidationError: If either value is missing, not a number, or out of range
    """
    latitude = parse_coordinate(lat)
    longitude = parse_coordinate(lon)
    if latitude is None or longitude is None:
        raise ValidationError("Query parameters lat and lon are required")
    if not -90 <= latitude <= 90:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180 <= longitude <= 180:
        raise ValidationError("Longitude must be between -180 and 180")
    return Coordinates(latitude=latitude, longitude=longitude)
