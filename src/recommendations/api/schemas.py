"""Pydantic response schemas for the Recommendations API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RecommendationResponse(BaseModel):
    id: str
    name: str
    address: str | None = None
    postal_code: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance_km: float | None = None
    reason: str
    score: float | None = None
    average_health: float | None = None
    average_hygiene: float | None = None
    review_count: int = 0

    @classmethod
    def from_recommendation(cls, rec) -> RecommendationResponse:
        return cls(**vars(rec))
