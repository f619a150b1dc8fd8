import math

DIRECTIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
SECTOR_DEG = 360.0 / len(DIRECTIONS)  # 22.5


def bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial bearing in degrees from point 1 to point 2."""
    lat1, lng1, lat2, lng2 = map(math.radians, [lat1, lng1, lat2, lng2])
    dlng = lng2 - lng1
    y = math.sin(dlng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlng)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


def normalize_degrees(deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = deg % 360
    # -1e-14 % 360 rounds up to 360.0
    return 0.0 if wrapped == 360.0 else wrapped


def compute_bearing(start, end) -> float:
    """
    Bearing from `start` to `end`, two objects with `lat` and `lng` attributes.

    Returns 0.0 when either point is missing or both points are the same;
    no bearing is defined for a stationary vehicle. Coordinates are not
    validated, NaN input gives a NaN bearing.
    """
    if start is None or end is None or (start.lat == end.lat and start.lng == end.lng):
        return 0.0
    return bearing(start.lat, start.lng, end.lat, end.lng)


def bearing_to_direction(bearing_deg: float) -> str | None:
    """
    Nearest of the 16 compass points for a bearing.

    Sector boundaries (11.25°, 33.75°, ...) round up to the next point
    clockwise, so 11.25 is "NNE" and 348.75 is "N". Returns None for
    NaN or infinite input.
    """
    if not math.isfinite(bearing_deg):
        return None
    index = math.floor(normalize_degrees(bearing_deg) / SECTOR_DEG + 0.5) % len(DIRECTIONS)
    return DIRECTIONS[index]


def shortest_angle_delta(current: float, target: float) -> float:
    """Signed rotation from `current` to `target`, in [-180, 180)."""
    return ((target - current + 540) % 360) - 180
