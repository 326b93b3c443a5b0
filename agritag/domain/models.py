"""
Domain models for tags, log entries, projects and weather.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
Stored documents use camelCase keys, so every persisted model carries
camelCase aliases and also accepts the snake_case field names.
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from agritag.domain.codes import TREE_DEVICE_CLASS


class AssetNamespace(str, Enum):
    """Which lookup tables and collection a tag belongs to."""
    TREE = "tree"
    ANIMAL = "animal"

    @property
    def collection(self) -> str:
        return "trees" if self is AssetNamespace.TREE else "animals"


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class _FrozenCamelModel(_CamelModel):
    class Config:
        frozen = True


# ============================================================
# Tag identifiers
# ============================================================

class TagIdentifier(_FrozenCamelModel):
    """Decoded tag in the current <class:2><version:1><species:2><serial> layout."""
    raw: str
    device_class: str
    version: str
    species_code: str
    serial: str

    @property
    def is_tree_tag(self) -> bool:
        return self.device_class == TREE_DEVICE_CLASS

    @property
    def is_well_formed(self) -> bool:
        return len(self.raw) >= 6


class LegacyTagIdentifier(_FrozenCamelModel):
    """Decoded tag in the earlier <location:2><species:2><subtype:1><serial> layout."""
    raw: str
    location_code: str
    species_code: str
    subtype_code: str
    serial: str


class TagDescription(_FrozenCamelModel):
    """Display labels for a current-layout tag."""
    category: str
    tier: str
    species_name: str
    serial: str


class LegacyTagDescription(_FrozenCamelModel):
    """Display labels for a legacy-layout tag."""
    location: str
    species_name: str
    subtype_name: str
    serial: str


# ============================================================
# Log entries
# ============================================================

class GeoPoint(_FrozenCamelModel):
    """A WGS84 coordinate."""
    latitude: float
    longitude: float


class TreeLogEntry(_FrozenCamelModel):
    """One immutable observation recorded against a tree."""
    id: str
    remark: Optional[str] = None
    type: Optional[str] = None
    age: Optional[int] = None
    fertilization_date: Optional[str] = None
    pesticide_date: Optional[str] = None
    watering_date: Optional[str] = None
    location: Optional[GeoPoint] = None
    updated_at: str


class AnimalLogEntry(_FrozenCamelModel):
    """One immutable observation recorded against a farm animal."""
    id: str
    type: Optional[str] = None
    health_status: Optional[str] = None
    gender: Optional[Literal["Jantan", "Betina"]] = None
    birth_date: Optional[str] = None
    weight: float = 0
    vaccination_date: Optional[str] = None
    production: float = 0
    location: Optional[GeoPoint] = None
    updated_at: str


class TreeLogUpdate(_FrozenCamelModel):
    """Fields to change on a tree; None keeps the previous value."""
    remark: Optional[str] = None
    type: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    fertilization_date: Optional[str] = None
    pesticide_date: Optional[str] = None
    watering_date: Optional[str] = None
    location: Optional[GeoPoint] = None


class AnimalLogUpdate(_FrozenCamelModel):
    """Fields to change on an animal; None keeps the previous value."""
    gender: Optional[Literal["Jantan", "Betina"]] = None
    birth_date: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)
    vaccination_date: Optional[str] = None
    production: Optional[float] = Field(default=None, ge=0)
    location: Optional[GeoPoint] = None


class TreeDocument(_CamelModel):
    """Stored document holding every log entry of one tree."""
    id: str
    logs: List[TreeLogEntry] = Field(default_factory=list)


class AnimalDocument(_CamelModel):
    """Stored document holding every log entry of one animal."""
    id: str
    logs: List[AnimalLogEntry] = Field(default_factory=list)


# ============================================================
# Projects
# ============================================================

class Project(_CamelModel):
    """A tagging project owned by one user."""
    id: str
    name: str
    description: str = ""
    logo: str = ""
    geolocation: GeoPoint
    user_id: str
    created_at: str
    start_date: str
    end_date: str


# ============================================================
# Weather and predictions
# ============================================================

class WeatherSnapshot(_FrozenCamelModel):
    """Current weather at a location, consumed read-only by the advisors."""
    temperature: float = Field(description="Temperature in °C")
    humidity: float = Field(description="Relative humidity in %")
    description: str = ""
    location_name: str = ""
    wind_speed: Optional[float] = Field(default=None, description="Wind speed in m/s")
    icon: Optional[str] = None


class Predicted(_FrozenCamelModel):
    """A harvest forecast."""
    status: Literal["predicted"] = "predicted"
    flowering_date: str
    harvest_date: str
    delay_reason: Optional[str] = None


class Unresolved(_FrozenCamelModel):
    """A forecast that could not be computed, with the reason why."""
    status: Literal["unresolved"] = "unresolved"
    reason: str


PredictionResult = Annotated[Union[Predicted, Unresolved], Field(discriminator="status")]
