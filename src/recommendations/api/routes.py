"""FastAPI routes for eatery recommendations."""

from fastapi import APIRouter, Depends, Query

from identity.dependencies import optional_principal
from identity.principal import Principal
from recommendations.api.schemas import RecommendationResponse
from recommendations.service import (
    recommendations_by_postal_code,
    recommendations_by_tags,
    recommendations_for,
)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def _respond(results):
    return [RecommendationResponse.from_recommendation(r) for r in results]


@router.get("", response_model=list[RecommendationResponse])
async def get_recommendations(
    lat: float | None = None,
    lng: float | None = None,
    principal: Principal | None = Depends(optional_principal),
) -> list[RecommendationResponse]:
    """Top five eateries for the caller, personalised when signed in."""
    return _respond(recommendations_for(principal, lat, lng))


@router.get("/tags", response_model=list[RecommendationResponse])
async def get_recommendations_by_tags(
    tags: list[str] = Query(default=[]),
    lat: float | None = None,
    lng: float | None = None,
) -> list[RecommendationResponse]:
    return _respond(recommendations_by_tags(tags, lat, lng))


@router.get("/postal/{postal_code}", response_model=list[RecommendationResponse])
async def get_recommendations_by_postal_code(
    postal_code: str,
    lat: float | None = None,
    lng: float | None = None,
) -> list[RecommendationResponse]:
    return _respond(recommendations_by_postal_code(postal_code, lat, lng))
