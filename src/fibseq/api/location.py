from __future__ import annotations

from fastapi import Request
from pydantic import BaseModel

UNKNOWN = "Unknown"

# Edge proxy headers carrying the visitor's geo/network attributes
_HEADER_FIELDS: dict[str, str] = {
    "city": "cf-ipcity",
    "country": "cf-ipcountry",
    "region": "cf-region",
    "timezone": "cf-timezone",
    "latitude": "cf-iplatitude",
    "longitude": "cf-iplongitude",
    "postalCode": "cf-postal-code",
}


class LocationInfo(BaseModel):
    """
    Request location attached to every record. Missing values are "Unknown".
    """

    city: str = UNKNOWN
    country: str = UNKNOWN
    region: str = UNKNOWN
    timezone: str = UNKNOWN
    latitude: str = UNKNOWN
    longitude: str = UNKNOWN
    postalCode: str = UNKNOWN
    colo: str = UNKNOWN


def location_from_request(request: Request) -> LocationInfo:
    values: dict[str, str] = {}
    for field_name, header in _HEADER_FIELDS.items():
        raw = request.headers.get(header)
        if raw:
            values[field_name] = raw

    # cf-ray looks like "<ray id>-<colo>"
    ray = request.headers.get("cf-ray", "")
    if "-" in ray:
        colo = ray.rsplit("-", 1)[1]
        if colo:
            values["colo"] = colo

    return LocationInfo(**values)
