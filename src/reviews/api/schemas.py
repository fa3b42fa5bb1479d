"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
Score ranges and photo limits are checked by the domain so that every
entry point reports them the same way.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    health_score: int
    hygiene_score: int
    text_feedback: str | None = None
    photos: list[str] | None = None


class UpdateReviewRequest(BaseModel):
    health_score: int | None = None
    hygiene_score: int | None = None
    text_feedback: str | None = None
    photos: list[str] | None = None


class FlagReviewRequest(BaseModel):
    reason: str | None = None


class ResolveFlagRequest(BaseModel):
    action: str  # "REMOVE" or "DISMISS"
    notes: str | None = None


class ModerationReasonRequest(BaseModel):
    reason: str | None = None


class RedeemPointsRequest(BaseModel):
    amount: int


class AddRewardRequest(BaseModel):
    name: str = Field(max_length=200)
    description: str | None = None
    points_required: int


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewIdResponse(BaseModel):
    review_id: str


class FlagIdResponse(BaseModel):
    flag_id: str


class RewardIdResponse(BaseModel):
    reward_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ReviewResponse(BaseModel):
    id: str
    eatery_id: str
    author_id: str
    health_score: int
    hygiene_score: int
    text_feedback: str | None = None
    photos: list[str] = Field(default_factory=list)
    is_hidden: bool = False
    is_own_review: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review, viewer_id=None) -> ReviewResponse:
        return cls(
            id=str(review.id),
            eatery_id=str(review.eatery_id),
            author_id=str(review.author_id),
            health_score=review.health_score,
            hygiene_score=review.hygiene_score,
            text_feedback=review.text_feedback,
            photos=list(review.photos or []),
            is_hidden=bool(review.is_hidden),
            is_own_review=viewer_id is not None and str(review.author_id) == str(viewer_id),
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class AggregatedRatingsResponse(BaseModel):
    eatery_id: str
    average_health: float | None = None
    average_hygiene: float | None = None
    review_count: int = 0


class FlagResponse(BaseModel):
    id: str
    review_id: str
    flagger_id: str
    reason: str
    status: str
    resolved_by: str | None = None
    admin_notes: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None

    @classmethod
    def from_flag(cls, flag) -> FlagResponse:
        return cls(
            id=str(flag.id),
            review_id=str(flag.review_id),
            flagger_id=str(flag.flagger_id),
            reason=flag.reason,
            status=flag.status,
            resolved_by=str(flag.resolved_by) if flag.resolved_by else None,
            admin_notes=flag.admin_notes,
            created_at=flag.created_at,
            resolved_at=flag.resolved_at,
        )


class PointsResponse(BaseModel):
    user_id: str
    total_points: int
    redeemed_points: int
    last_updated: datetime | None = None


class RewardResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    points_required: int
