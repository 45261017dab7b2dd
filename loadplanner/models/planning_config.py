"""Planning configuration for one optimization run.

All geography and timing parameters live here so that the engine can be run
against alternate depots, zone tables and service rules. The defaults describe
the Tuas (Singapore) depot deployment.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .zone import DeliveryZone


class AssignmentStrategy(str, Enum):
    """Fleet assignment heuristic."""
    MULTI_TRIP = "multi_trip"
    ZONE_CLUSTER = "zone_cluster"


class GeoPoint(BaseModel):
    """Latitude/longitude pair."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(frozen=True)


class Depot(BaseModel):
    """Depot where every trip starts and ends."""
    name: str = Field(default="Tuas Depot")
    address: str = Field(default="Tuas, Singapore 639405")
    zipcode: str = Field(default="639405")
    latitude: float = Field(default=1.3187, ge=-90, le=90)
    longitude: float = Field(default=103.6390, ge=-180, le=180)

    model_config = ConfigDict(frozen=True)


class ZoneLink(BaseModel):
    """Symmetric travel time between two different zones."""
    zone_a: DeliveryZone
    zone_b: DeliveryZone
    minutes: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def zones_must_differ(self):
        if self.zone_a == self.zone_b:
            raise ValueError(f"ZoneLink needs two different zones, got {self.zone_a.value} twice")
        return self


DEFAULT_ZONE_CENTERS: Dict[DeliveryZone, GeoPoint] = {
    DeliveryZone.NORTH: GeoPoint(latitude=1.4320, longitude=103.7860),
    DeliveryZone.SOUTH: GeoPoint(latitude=1.2700, longitude=103.8200),
    DeliveryZone.EAST: GeoPoint(latitude=1.3500, longitude=103.9400),
    DeliveryZone.WEST: GeoPoint(latitude=1.3500, longitude=103.7000),
    DeliveryZone.CENTRAL: GeoPoint(latitude=1.3000, longitude=103.8500),
}

DEFAULT_DEPOT_MINUTES: Dict[DeliveryZone, float] = {
    DeliveryZone.WEST: 15,
    DeliveryZone.CENTRAL: 30,
    DeliveryZone.SOUTH: 35,
    DeliveryZone.NORTH: 40,
    DeliveryZone.EAST: 45,
}

DEFAULT_ZONE_LINKS: List[ZoneLink] = [
    ZoneLink(zone_a=DeliveryZone.CENTRAL, zone_b=DeliveryZone.EAST, minutes=25),
    ZoneLink(zone_a=DeliveryZone.CENTRAL, zone_b=DeliveryZone.NORTH, minutes=20),
    ZoneLink(zone_a=DeliveryZone.CENTRAL, zone_b=DeliveryZone.SOUTH, minutes=15),
    ZoneLink(zone_a=DeliveryZone.CENTRAL, zone_b=DeliveryZone.WEST, minutes=20),
    ZoneLink(zone_a=DeliveryZone.EAST, zone_b=DeliveryZone.NORTH, minutes=25),
    ZoneLink(zone_a=DeliveryZone.EAST, zone_b=DeliveryZone.SOUTH, minutes=30),
    ZoneLink(zone_a=DeliveryZone.EAST, zone_b=DeliveryZone.WEST, minutes=40),
    ZoneLink(zone_a=DeliveryZone.NORTH, zone_b=DeliveryZone.SOUTH, minutes=35),
    ZoneLink(zone_a=DeliveryZone.NORTH, zone_b=DeliveryZone.WEST, minutes=35),
    ZoneLink(zone_a=DeliveryZone.SOUTH, zone_b=DeliveryZone.WEST, minutes=25),
]


def _sectors(zone: DeliveryZone, *sectors: str) -> Dict[str, DeliveryZone]:
    return {sector: zone for sector in sectors}


# Singapore postal district (first two zipcode digits) to zone
DEFAULT_SECTOR_ZONES: Dict[str, DeliveryZone] = {
    **_sectors(DeliveryZone.CENTRAL, "01", "02", "03", "04", "05", "06", "07", "08",
               "14", "15", "16", "17", "18", "19", "20", "21"),
    **_sectors(DeliveryZone.EAST, "38", "39", "40", "41", "42", "43", "44", "45",
               "46", "47", "48", "49", "50", "51", "52"),
    **_sectors(DeliveryZone.NORTH, "53", "54", "55", "56", "57", "72", "73", "75",
               "76", "77", "78", "79", "80", "81", "82"),
    **_sectors(DeliveryZone.WEST, "22", "23", "58", "59", "60", "61", "62", "63",
               "64", "65", "66", "67", "68", "69", "70", "71"),
    **_sectors(DeliveryZone.SOUTH, "09", "10", "11", "12", "13", "24", "25", "26",
               "27", "28", "29", "30", "31", "32", "33", "34", "35", "36", "37"),
}


class PlanningConfig(BaseModel):
    """
    Immutable parameters of the load and route optimization.

    Attributes:
        depot: Depot location
        zone_centers: Approximate centre coordinate of each zone
        depot_minutes: Travel time from the depot to each zone
        zone_links: Symmetric zone-to-zone travel times
        same_zone_minutes: Travel time between two stops of the same zone
        unknown_travel_minutes: Travel time for pairs missing from the tables
        service_minutes: Time spent at a regular stop
        heavy_service_minutes: Time spent at a heavy or two-helper stop
        heavy_order_threshold_kg: Order weight above which a stop is heavy
        reload_minutes: Depot reload time between successive trips of a truck
        available_helpers: Helper headcount for the zone-cluster strategy (None = unlimited)
        balance_tolerance: Allowed centre-of-gravity offset as a fraction of width/depth
        sector_zones: Postal sector to zone lookup
        default_zone: Zone used when a zipcode has no known sector
        assignment_strategy: Fleet assignment heuristic
    """
    depot: Depot = Field(default_factory=Depot)
    zone_centers: Dict[DeliveryZone, GeoPoint] = Field(
        default_factory=lambda: dict(DEFAULT_ZONE_CENTERS)
    )
    depot_minutes: Dict[DeliveryZone, float] = Field(
        default_factory=lambda: dict(DEFAULT_DEPOT_MINUTES)
    )
    zone_links: List[ZoneLink] = Field(default_factory=lambda: list(DEFAULT_ZONE_LINKS))
    same_zone_minutes: float = Field(default=5, ge=0)
    unknown_travel_minutes: float = Field(default=30, ge=0)
    service_minutes: float = Field(default=10, ge=0)
    heavy_service_minutes: float = Field(default=15, ge=0)
    heavy_order_threshold_kg: float = Field(default=50, ge=0)
    reload_minutes: float = Field(default=30, ge=0)
    available_helpers: Optional[int] = Field(default=None, ge=0)
    balance_tolerance: float = Field(default=0.3, gt=0, le=0.5)
    sector_zones: Dict[str, DeliveryZone] = Field(
        default_factory=lambda: dict(DEFAULT_SECTOR_ZONES)
    )
    default_zone: DeliveryZone = Field(default=DeliveryZone.CENTRAL)
    assignment_strategy: AssignmentStrategy = Field(default=AssignmentStrategy.MULTI_TRIP)

    model_config = ConfigDict(frozen=True)

    @field_validator("depot_minutes")
    @classmethod
    def depot_minutes_non_negative(cls, v):
        for zone, minutes in v.items():
            if minutes < 0:
                raise ValueError(f"depot_minutes[{zone.value}] must be >= 0, got {minutes}")
        return v

    @field_validator("sector_zones")
    @classmethod
    def sectors_are_two_digits(cls, v):
        for sector in v:
            if len(sector) != 2 or not sector.isdigit():
                raise ValueError(f"Postal sector must be two digits, got '{sector}'")
        return v

    @model_validator(mode="after")
    def links_are_unique(self):
        """Reject two links for the same zone pair."""
        seen = set()
        for link in self.zone_links:
            pair = frozenset((link.zone_a, link.zone_b))
            if pair in seen:
                raise ValueError(
                    f"Duplicate zone link {link.zone_a.value}-{link.zone_b.value}"
                )
            seen.add(pair)
        return self

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "PlanningConfig":
        """
        Load a configuration from a JSON file.

        Missing keys keep their defaults.

        Args:
            path: JSON file path

        Returns:
            Validated PlanningConfig
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)
