"""
Domain service: harvest forecasting and weather-driven care advice for trees.

The forecast works from the most recent care date of a tree:
- Flowering is expected one month after the reference date
- Harvest follows flowering after 8 months (fast varieties) or 10 months
- Current weather can push the harvest back by whole months

Nothing here raises for domain input. A forecast that cannot be computed
comes back as ``Unresolved`` with a human-readable reason.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from agritag.config import settings
from agritag.domain.models import (
    Predicted,
    TreeLogEntry,
    Unresolved,
    WeatherSnapshot,
)
from agritag.utils.calendar import add_months, parse_date

logger = logging.getLogger(__name__)

# Diagnostics
NOT_MATURE = "Pohon belum cukup umur untuk berbuah (minimal {age} tahun)."
NO_REFERENCE_DATE = "Tanggal pemupukan, penyiraman, atau pembaruan tidak tersedia."
INVALID_REFERENCE_DATE = "Format tanggal tidak valid: {value!r}."

# Delay reasons
WEATHER_UNAVAILABLE = "Data cuaca tidak tersedia, prediksi belum memperhitungkan cuaca."
DELAY_NON_IDEAL_TEMPERATURE = "Suhu tidak ideal untuk pembungaan."
DELAY_EXTREME_HEAT = "Suhu ekstrem di atas 40°C menyebabkan buah rontok."
DELAY_RAIN = "Hujan memengaruhi pematangan buah."

# Recommendations
REC_NO_WEATHER = "Data cuaca tidak tersedia. Pantau kondisi pohon secara manual."
REC_EXTREME_HEAT = "Suhu di atas 40°C: risiko tinggi buah rontok. Berikan naungan dan tambah penyiraman."
REC_FROST = "Suhu di bawah -2°C: lindungi pohon dari embun beku."
REC_IDEAL_TEMPERATURE = "Suhu ideal untuk pembungaan. Pantau kelembapan secara berkala."
REC_HIGH_HUMIDITY = "Kelembapan di atas 80%: risiko penyakit jamur. Periksa daun dan buah."
REC_RAIN = "Hujan terdeteksi: pastikan drainase baik untuk mencegah busuk akar."
REC_CLEAR = "Cuaca cerah: pastikan irigasi mencukupi."
REC_NORMAL = "Kondisi cuaca normal. Lanjutkan perawatan rutin."

RAIN_KEYWORDS = ("rain", "shower")
CLEAR_KEYWORDS = ("clear", "sunny")


@dataclass
class AdvisoryConfig:
    """Configuration for harvest forecasting and weather advice."""

    # Forecast schedule
    maturity_age: int = 3
    """Minimum tree age (years) before a forecast is attempted"""

    months_to_flowering: int = 1
    months_fast_variety: int = 8
    months_default: int = 10
    fast_varieties: frozenset = field(
        default_factory=lambda: frozenset({"Fuerte", "Mexicola"})
    )

    # Weather thresholds (°C / %)
    ideal_min_temperature: float = 10.0
    ideal_max_temperature: float = 20.0
    extreme_heat_temperature: float = 40.0
    frost_temperature: float = -2.0
    high_humidity: float = 80.0

    # Delays in months
    non_ideal_temperature_delay: int = 1
    extreme_heat_delay: int = 2
    rain_delay: int = 1

    @classmethod
    def from_settings(cls) -> "AdvisoryConfig":
        return cls(
            maturity_age=settings.harvest_maturity_age,
            months_to_flowering=settings.harvest_months_to_flowering,
            months_fast_variety=settings.harvest_months_fast_variety,
            months_default=settings.harvest_months_default,
            fast_varieties=frozenset(settings.harvest_fast_varieties),
        )


def _mentions(description: str, keywords: tuple) -> bool:
    text = description.lower()
    return any(keyword in text for keyword in keywords)


class HarvestAdvisor:
    """
    Domain service for tree harvest forecasts and care recommendations.

    Stateless: every method is a pure function of its arguments and the
    configuration the advisor was built with.
    """

    def __init__(self, config: Optional[AdvisoryConfig] = None):
        """
        Initialize the advisor.

        Args:
            config: Thresholds and schedule; defaults come from settings
        """
        self.config = config or AdvisoryConfig.from_settings()

    def predict_base_harvest(
        self,
        subject: TreeLogEntry,
        variety_hint: str,
    ) -> Union[Predicted, Unresolved]:
        """
        Forecast flowering and harvest dates without weather adjustment.

        Args:
            subject: Latest log entry of the tree
            variety_hint: Variety name, e.g. "Hass" or "Fuerte"

        Returns:
            Predicted with ISO dates, or Unresolved with the reason
        """
        dates = self._base_dates(subject, variety_hint)
        if isinstance(dates, Unresolved):
            return dates

        flowering, harvest = dates
        return Predicted(
            flowering_date=flowering.isoformat(),
            harvest_date=harvest.isoformat(),
        )

    def adjust_for_weather(
        self,
        subject: TreeLogEntry,
        variety_hint: str,
        weather: Optional[WeatherSnapshot],
    ) -> Union[Predicted, Unresolved]:
        """
        Forecast the harvest and push it back for unfavourable weather.

        Every delay rule is evaluated and the delays add up:
        - temperature below 10°C: +1 month
        - temperature above 40°C: +2 months
        - rain or showers in the description: +1 month

        Args:
            subject: Latest log entry of the tree
            variety_hint: Variety name
            weather: Current weather, or None when unavailable

        Returns:
            Predicted with an optional delay reason, or Unresolved
        """
        dates = self._base_dates(subject, variety_hint)
        if isinstance(dates, Unresolved):
            return dates

        flowering, harvest = dates

        if weather is None:
            return Predicted(
                flowering_date=flowering.isoformat(),
                harvest_date=harvest.isoformat(),
                delay_reason=WEATHER_UNAVAILABLE,
            )

        delay_months, reasons = self._weather_delays(weather)
        if delay_months:
            logger.debug(f"Tree {subject.id}: harvest delayed {delay_months} month(s)")

        try:
            delayed_harvest = add_months(harvest, delay_months)
        except (ValueError, OverflowError):
            return Unresolved(reason=INVALID_REFERENCE_DATE.format(
                value=subject.fertilization_date or subject.watering_date or subject.updated_at
            ))

        return Predicted(
            flowering_date=flowering.isoformat(),
            harvest_date=delayed_harvest.isoformat(),
            delay_reason=" ".join(reasons).strip() or None,
        )

    def get_weather_recommendations(
        self,
        weather: Optional[WeatherSnapshot],
    ) -> list[str]:
        """
        Turn a weather snapshot into care recommendations.

        Args:
            weather: Current weather, or None when unavailable

        Returns:
            Non-empty list of recommendation strings
        """
        if weather is None:
            return [REC_NO_WEATHER]

        cfg = self.config
        temperature = weather.temperature
        recommendations = []

        if temperature > cfg.extreme_heat_temperature:
            recommendations.append(REC_EXTREME_HEAT)
        if temperature < cfg.frost_temperature:
            recommendations.append(REC_FROST)
        if cfg.ideal_min_temperature <= temperature <= cfg.ideal_max_temperature:
            recommendations.append(REC_IDEAL_TEMPERATURE)
        if weather.humidity > cfg.high_humidity:
            recommendations.append(REC_HIGH_HUMIDITY)
        if _mentions(weather.description, RAIN_KEYWORDS):
            recommendations.append(REC_RAIN)
        if _mentions(weather.description, CLEAR_KEYWORDS):
            recommendations.append(REC_CLEAR)

        return recommendations or [REC_NORMAL]

    def _base_dates(
        self,
        subject: TreeLogEntry,
        variety_hint: str,
    ) -> Union[tuple[date, date], Unresolved]:
        cfg = self.config

        if (subject.age or 0) < cfg.maturity_age:
            return Unresolved(reason=NOT_MATURE.format(age=cfg.maturity_age))

        # Most specific care event first
        reference_value = (
            subject.fertilization_date
            or subject.watering_date
            or subject.updated_at
        )
        if not reference_value:
            return Unresolved(reason=NO_REFERENCE_DATE)

        reference = parse_date(reference_value)
        if reference is None:
            logger.debug(f"Tree {subject.id}: unparseable reference date {reference_value!r}")
            return Unresolved(reason=INVALID_REFERENCE_DATE.format(value=reference_value))

        if variety_hint in cfg.fast_varieties:
            months_to_harvest = cfg.months_fast_variety
        else:
            months_to_harvest = cfg.months_default

        try:
            flowering = add_months(reference, cfg.months_to_flowering)
            harvest = add_months(flowering, months_to_harvest)
        except (ValueError, OverflowError):
            logger.debug(f"Tree {subject.id}: schedule from {reference_value!r} leaves the calendar")
            return Unresolved(reason=INVALID_REFERENCE_DATE.format(value=reference_value))
        return flowering, harvest

    def _weather_delays(self, weather: WeatherSnapshot) -> tuple[int, list[str]]:
        cfg = self.config
        temperature = weather.temperature
        delay_months = 0
        reasons = []

        # Warm days up to the extreme-heat limit do not delay the harvest
        if temperature < cfg.ideal_min_temperature:
            delay_months += cfg.non_ideal_temperature_delay
            reasons.append(DELAY_NON_IDEAL_TEMPERATURE)
        if temperature > cfg.extreme_heat_temperature:
            delay_months += cfg.extreme_heat_delay
            reasons.append(DELAY_EXTREME_HEAT)
        if _mentions(weather.description, RAIN_KEYWORDS):
            delay_months += cfg.rain_delay
            reasons.append(DELAY_RAIN)

        return delay_months, reasons
