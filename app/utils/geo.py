import math

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in kilometres between two points given in decimal
    degrees, using the spherical law of cosines.

    Rounding can push the cosine sum slightly outside [-1, 1] for points that
    are very close together or antipodal, so it is clamped before acos.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    lon1_r, lon2_r = math.radians(lon1), math.radians(lon2)

    cosine = (
        math.cos(lat1_r) * math.cos(lat2_r) * math.cos(lon2_r - lon1_r)
        + math.sin(lat1_r) * math.sin(lat2_r)
    )
    return EARTH_RADIUS_KM * math.acos(min(1.0, max(-1.0, cosine)))
