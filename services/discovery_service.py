from typing import List, Optional
from sqlalchemy.orm import Session
import logging
import math

from domain.schemas.mess_schemas import MessDiscoveryResult
from repositories import MessRepository
from app.exceptions import ServiceValidationError

logger = logging.getLogger("messmate.discovery")

EARTH_RADIUS_KM = 6371.0


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance between two points in kilometres"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


class DiscoveryService:
    @staticmethod
    def discover_messes(
        db: Session,
        query: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        max_distance_km: Optional[float] = None,
    ) -> List[MessDiscoveryResult]:
        """
        Search approved messes and order them by distance from the caller.

        Without a location the results keep name order and carry no distance;
        ``max_distance_km`` is then ignored.

        Raises:
            ServiceValidationError: If only one of latitude/longitude is given
        """
        if (latitude is None) != (longitude is None):
            raise ServiceValidationError(
                "latitude and longitude must be provided together"
            )

        messes = MessRepository(db).search_approved(query)
        results = [MessDiscoveryResult.model_validate(m) for m in messes]

        if latitude is None:
            return results

        for r in results:
            r.distance_km = round(
                calculate_distance(latitude, longitude, r.latitude, r.longitude), 3
            )

        if max_distance_km is not None:
            results = [r for r in results if r.distance_km <= max_distance_km]

        results.sort(key=lambda r: r.distance_km)
        logger.debug(
            f"discover_messes query={query!r} matched={len(results)} "
            f"max_distance_km={max_distance_km}"
        )
        return results
