"""
Read models assembled for the tree and farm dashboards.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from agritag.domain.models import (
    AnimalLogEntry,
    PredictionResult,
    TreeLogEntry,
    WeatherSnapshot,
)


class _Dashboard(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ActivitySummary(_Dashboard):
    """Subjects updated within the last month versus the rest."""
    active: int = 0
    inactive: int = 0


class TreeDashboard(_Dashboard):
    """Everything the tree map view shows for one project."""
    project_id: str
    trees: List[TreeLogEntry] = Field(description="Latest entry of every tree")
    recent_logs: List[TreeLogEntry] = Field(description="All log entries, newest first")
    activity: ActivitySummary
    logs_per_day: Dict[str, int]
    features: Dict[str, Any] = Field(description="GeoJSON FeatureCollection")
    weather: Optional[WeatherSnapshot] = None
    weather_error: Optional[str] = None
    prediction: PredictionResult
    recommendations: List[str]


class FarmDashboard(_Dashboard):
    """Everything the farm map view shows for one project."""
    project_id: str
    animals: List[AnimalLogEntry] = Field(description="Latest entry of every animal")
    recent_logs: List[AnimalLogEntry] = Field(description="All log entries, newest first")
    activity: ActivitySummary
    logs_per_day: Dict[str, int]
    features: Dict[str, Any] = Field(description="GeoJSON FeatureCollection")
    weather: Optional[WeatherSnapshot] = None
    weather_error: Optional[str] = None
    health_prediction: str
    recommendations: List[str]
