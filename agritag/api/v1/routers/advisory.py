"""
API router for the advisory engines on posted data.
"""
from fastapi import APIRouter

from agritag.api.dependencies import AnimalHealthAdvisorDep, HarvestAdvisorDep
from agritag.api.v1.models.requests import (
    AnimalAdvisoryRequest,
    HarvestAdvisoryRequest,
    WeatherRecommendationRequest,
)
from agritag.api.v1.models.responses import (
    AnimalAdvisoryResponse,
    HarvestAdvisoryResponse,
    RecommendationsResponse,
)
from agritag.services.application.dashboard_service import DEFAULT_VARIETY


router = APIRouter(
    prefix="/advisory",
    tags=["advisory"],
    responses={429: {"description": "Rate limit exceeded"}},
)


@router.post(
    "/harvest",
    response_model=HarvestAdvisoryResponse,
    summary="Forecast a harvest",
    description="""
    Forecast flowering and harvest dates for a tree entry.

    The prediction is either `{"status": "predicted", ...}` with ISO dates and
    an optional delay reason, or `{"status": "unresolved", "reason": ...}` when
    the tree is younger than three years or has no usable care date.
    """,
)
async def forecast_harvest(
    body: HarvestAdvisoryRequest,
    advisor: HarvestAdvisorDep,
) -> HarvestAdvisoryResponse:
    variety = body.variety_hint or body.tree.type or DEFAULT_VARIETY
    return HarvestAdvisoryResponse(
        prediction=advisor.adjust_for_weather(body.tree, variety, body.weather),
        recommendations=advisor.get_weather_recommendations(body.weather),
    )


@router.post(
    "/weather-recommendations",
    response_model=RecommendationsResponse,
    summary="Tree care recommendations for the weather",
)
async def weather_recommendations(
    body: WeatherRecommendationRequest,
    advisor: HarvestAdvisorDep,
) -> RecommendationsResponse:
    return RecommendationsResponse(
        recommendations=advisor.get_weather_recommendations(body.weather),
    )


@router.post(
    "/animal-health",
    response_model=AnimalAdvisoryResponse,
    summary="Animal health flags and care recommendations",
)
async def animal_health(
    body: AnimalAdvisoryRequest,
    advisor: AnimalHealthAdvisorDep,
) -> AnimalAdvisoryResponse:
    return AnimalAdvisoryResponse(
        health_prediction=advisor.predict_health_issues(body.animal, body.today),
        recommendations=advisor.get_care_recommendations(body.weather, body.animal, body.today),
    )
