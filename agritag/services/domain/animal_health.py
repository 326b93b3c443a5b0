"""
Domain service: health flags and care recommendations for farm animals.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from agritag.config import settings
from agritag.domain.models import AnimalLogEntry, WeatherSnapshot
from agritag.utils.calendar import months_between, parse_date

ISSUE_LOW_WEIGHT = "Berat badan terlalu rendah untuk usia."
ISSUE_NO_VACCINATION = "Belum ada data vaksinasi."
ISSUE_STALE_VACCINATION = "Vaksinasi terakhir lebih dari {months} bulan lalu."
ISSUE_LOW_PRODUCTION = "Produksi sangat rendah, mungkin ada masalah kesehatan."
HEALTHY = "Hewan tampak sehat."

CARE_NO_WEATHER = "Data cuaca tidak tersedia."
CARE_HEAT = "Pastikan hewan memiliki akses ke air bersih dan tempat teduh."
CARE_HUMIDITY = "Tingkatkan ventilasi untuk mencegah stres panas."
CARE_RAIN = "Sediakan tempat berlindung untuk melindungi hewan dari hujan."
CARE_REVACCINATE = "Jadwalkan vaksinasi ulang segera."
CARE_FIRST_VACCINATION = "Segera lakukan vaksinasi pertama."
CARE_CHECK_DIET = "Periksa pola makan dan konsultasikan ke dokter hewan."
CARE_NONE = "Tidak ada rekomendasi khusus."


@dataclass
class HealthConfig:
    """Thresholds for animal health flags."""
    min_weight_kg: float = 10.0
    vaccination_max_age_months: int = 6
    min_production: float = 1.0
    heat_temperature: float = 30.0
    high_humidity: float = 80.0

    @classmethod
    def from_settings(cls) -> "HealthConfig":
        return cls(
            min_weight_kg=settings.animal_min_weight_kg,
            vaccination_max_age_months=settings.animal_vaccination_max_age_months,
            min_production=settings.animal_min_production,
        )


class AnimalHealthAdvisor:
    """Flags likely health issues from the latest record of an animal."""

    def __init__(self, config: Optional[HealthConfig] = None):
        self.config = config or HealthConfig.from_settings()

    def predict_health_issues(
        self,
        animal: AnimalLogEntry,
        today: Optional[date] = None,
    ) -> str:
        """
        Summarise health issues of an animal in one sentence list.

        Args:
            animal: Latest log entry of the animal
            today: Reference date for vaccination staleness (defaults to today)

        Returns:
            Triggered issues joined by spaces, or a healthy message
        """
        cfg = self.config
        issues = []

        if animal.weight < cfg.min_weight_kg:
            issues.append(ISSUE_LOW_WEIGHT)

        vaccination_status = self._vaccination_status(animal, today)
        if vaccination_status == "missing":
            issues.append(ISSUE_NO_VACCINATION)
        elif vaccination_status == "stale":
            issues.append(ISSUE_STALE_VACCINATION.format(months=cfg.vaccination_max_age_months))

        if animal.production < cfg.min_production:
            issues.append(ISSUE_LOW_PRODUCTION)

        return " ".join(issues) if issues else HEALTHY

    def get_care_recommendations(
        self,
        weather: Optional[WeatherSnapshot],
        animal: Optional[AnimalLogEntry],
        today: Optional[date] = None,
    ) -> list[str]:
        """
        Care recommendations from the weather and, when known, the animal.

        Args:
            weather: Current weather, or None when unavailable
            animal: Latest log entry of the animal, if any
            today: Reference date for vaccination staleness

        Returns:
            Non-empty list of recommendation strings
        """
        if weather is None:
            return [CARE_NO_WEATHER]

        cfg = self.config
        recommendations = []

        if weather.temperature > cfg.heat_temperature:
            recommendations.append(CARE_HEAT)
        if weather.humidity > cfg.high_humidity:
            recommendations.append(CARE_HUMIDITY)
        if "rain" in weather.description.lower():
            recommendations.append(CARE_RAIN)

        if animal is not None:
            vaccination_status = self._vaccination_status(animal, today)
            if vaccination_status == "stale":
                recommendations.append(CARE_REVACCINATE)
            elif vaccination_status == "missing":
                recommendations.append(CARE_FIRST_VACCINATION)

            if animal.weight < cfg.min_weight_kg:
                recommendations.append(CARE_CHECK_DIET)

        return recommendations or [CARE_NONE]

    def _vaccination_status(
        self,
        animal: AnimalLogEntry,
        today: Optional[date],
    ) -> str:
        if not animal.vaccination_date:
            return "missing"

        last_vaccination = parse_date(animal.vaccination_date)
        # An unreadable date is as good as no record
        if last_vaccination is None:
            return "missing"

        elapsed = months_between(last_vaccination, today or date.today())
        if elapsed > self.config.vaccination_max_age_months:
            return "stale"
        return "current"
