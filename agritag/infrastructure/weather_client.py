"""
Infrastructure layer: OpenWeatherMap current-weather client.
"""
from typing import Any, Dict, Optional

from agritag.config import settings
from agritag.domain.models import WeatherSnapshot
from agritag.infrastructure.api_constants import WeatherEndpoints
from agritag.infrastructure.external_api_client import (
    ExternalAPIClient,
    ExternalAPIError,
)


def to_snapshot(data: Dict[str, Any]) -> WeatherSnapshot:
    """
    Map an OpenWeatherMap response onto a WeatherSnapshot.

    Args:
        data: Decoded body of /data/2.5/weather in metric units

    Returns:
        WeatherSnapshot instance
    """
    main = data.get("main", {})
    conditions = data.get("weather") or [{}]
    return WeatherSnapshot(
        temperature=main.get("temp", 0.0),
        humidity=main.get("humidity", 0.0),
        description=conditions[0].get("description", ""),
        location_name=data.get("name", ""),
        wind_speed=data.get("wind", {}).get("speed"),
        icon=conditions[0].get("icon"),
    )


class WeatherClient(ExternalAPIClient):
    """Client for the OpenWeatherMap current-weather endpoint."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize the client.

        Args:
            api_key: OpenWeatherMap key; defaults to settings
        """
        super().__init__(
            base_url=settings.weather_api_base_url,
            timeout=settings.request_timeout,
        )
        self.api_key = settings.weather_api_key if api_key is None else api_key

    async def get_current_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """
        Fetch the current weather at a coordinate.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            WeatherSnapshot instance

        Raises:
            ExternalAPIError: If no API key is configured or the request fails
        """
        if not self.api_key:
            raise ExternalAPIError("Weather API key is missing", status_code=503)

        data = await self._make_request(
            "GET",
            WeatherEndpoints.CURRENT_WEATHER,
            params={
                "lat": latitude,
                "lon": longitude,
                "units": WeatherEndpoints.UNITS,
                "appid": self.api_key,
            },
        )
        return to_snapshot(data)


# Singleton instance
_weather_client: Optional[WeatherClient] = None


def get_weather_client() -> WeatherClient:
    """
    Get or create the singleton weather client.

    Returns:
        WeatherClient instance
    """
    global _weather_client
    if _weather_client is None:
        _weather_client = WeatherClient()
    return _weather_client
