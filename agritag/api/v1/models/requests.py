"""
API request models using Pydantic.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from agritag.domain.models import AnimalLogEntry, GeoPoint, TreeLogEntry, WeatherSnapshot


class _Request(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ProjectCreateRequest(_Request):
    """Body for creating a project."""
    user_id: str = Field(description="Owner of the project")
    name: str = Field(min_length=1, description="Project name")
    geolocation: GeoPoint


class ProjectUpdateRequest(_Request):
    """Body for a partial project update; omitted fields are unchanged."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    logo: Optional[str] = None
    geolocation: Optional[GeoPoint] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class HarvestAdvisoryRequest(_Request):
    """Body for an ad-hoc harvest forecast."""
    tree: TreeLogEntry
    variety_hint: Optional[str] = Field(
        default=None,
        description="Variety used for the ripening schedule; defaults to the tree type, then Hass",
    )
    weather: Optional[WeatherSnapshot] = None

    class Config:
        json_schema_extra = {
            "example": {
                "tree": {
                    "id": "ST1AP0001",
                    "type": "Hass",
                    "age": 5,
                    "fertilizationDate": "2024-01-15",
                    "updatedAt": "2024-01-15T08:00:00.000Z",
                },
                "weather": {
                    "temperature": 25.0,
                    "humidity": 50.0,
                    "description": "clear sky",
                    "locationName": "Denpasar",
                },
            }
        }


class WeatherRecommendationRequest(_Request):
    """Body for weather-based tree care recommendations."""
    weather: Optional[WeatherSnapshot] = None


class AnimalAdvisoryRequest(_Request):
    """Body for animal health and care advice."""
    animal: AnimalLogEntry
    weather: Optional[WeatherSnapshot] = None
    today: Optional[date] = Field(
        default=None,
        description="Reference date for vaccination checks; defaults to today",
    )
