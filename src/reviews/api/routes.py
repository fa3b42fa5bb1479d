"""FastAPI routes for the Reviews & Rewards bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). The caller's identity comes
from the identity dependencies and is passed into every command.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.dependencies import current_principal, moderator_principal, optional_principal
from identity.principal import Principal
from reviews.api.schemas import (
    AddRewardRequest,
    AggregatedRatingsResponse,
    FlagIdResponse,
    FlagResponse,
    FlagReviewRequest,
    ModerationReasonRequest,
    PointsResponse,
    RedeemPointsRequest,
    ResolveFlagRequest,
    ReviewIdResponse,
    ReviewResponse,
    RewardIdResponse,
    RewardResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateReviewRequest,
)
from reviews.concurrency import author_key, flag_key, points_key, process_serialized, review_key
from reviews.flag.flagging import FlagReview
from reviews.flag.queries import flags
from reviews.moderation.moderation import DeleteReviewByAdmin, HideReview, ResolveFlag
from reviews.points.ledger import RedeemPoints
from reviews.points.queries import available_rewards, points_balance
from reviews.points.rewards import AddReward, RedeemReward
from reviews.review.editing import UpdateReview
from reviews.review.queries import aggregated_ratings, user_review, visible_reviews
from reviews.review.removal import DeleteReview
from reviews.review.submission import SubmitReview

eatery_router = APIRouter(prefix="/eateries", tags=["reviews"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
moderation_router = APIRouter(prefix="/moderation", tags=["moderation"])
points_router = APIRouter(prefix="/points", tags=["points"])
rewards_router = APIRouter(prefix="/rewards", tags=["rewards"])


# ---------------------------------------------------------------------------
# Eatery reviews
# ---------------------------------------------------------------------------
@eatery_router.post("/{eatery_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(
    eatery_id: str,
    body: SubmitReviewRequest,
    principal: Principal = Depends(current_principal),
) -> ReviewIdResponse:
    """Submit a review, or edit the caller's active review of this eatery."""
    command = SubmitReview(
        eatery_id=eatery_id,
        author_id=principal.user_id,
        **body.model_dump(exclude_none=True),
    )
    review_id = process_serialized(command, author_key(principal.user_id))
    return ReviewIdResponse(review_id=review_id)


@eatery_router.get("/{eatery_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(
    eatery_id: str,
    sort_by: str = "RECENT",
    principal: Principal | None = Depends(optional_principal),
) -> list[ReviewResponse]:
    viewer_id = principal.user_id if principal else None
    return [ReviewResponse.from_review(r, viewer_id) for r in visible_reviews(eatery_id, sort_by)]


@eatery_router.get("/{eatery_id}/ratings", response_model=AggregatedRatingsResponse)
async def get_ratings(eatery_id: str) -> AggregatedRatingsResponse:
    ratings = aggregated_ratings(eatery_id)
    return AggregatedRatingsResponse(
        eatery_id=eatery_id,
        average_health=ratings.average_health,
        average_hygiene=ratings.average_hygiene,
        review_count=ratings.review_count,
    )


@eatery_router.get("/{eatery_id}/reviews/mine", response_model=ReviewResponse | None)
async def get_my_review(
    eatery_id: str,
    principal: Principal = Depends(current_principal),
) -> ReviewResponse | None:
    review = user_review(eatery_id, principal.user_id)
    return ReviewResponse.from_review(review, principal.user_id) if review else None


# ---------------------------------------------------------------------------
# Single review
# ---------------------------------------------------------------------------
@review_router.put("/{review_id}", response_model=StatusResponse)
async def update_review(
    review_id: str,
    body: UpdateReviewRequest,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    command = UpdateReview(
        review_id=review_id,
        requester_id=principal.user_id,
        **body.model_dump(exclude_none=True),
    )
    process_serialized(command, author_key(principal.user_id))
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(
    review_id: str,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    command = DeleteReview(review_id=review_id, requester_id=principal.user_id)
    process_serialized(command, author_key(principal.user_id))
    return StatusResponse()


@review_router.post("/{review_id}/flags", status_code=201, response_model=FlagIdResponse)
async def flag_review(
    review_id: str,
    body: FlagReviewRequest,
    principal: Principal = Depends(current_principal),
) -> FlagIdResponse:
    command = FlagReview(review_id=review_id, flagger_id=principal.user_id, reason=body.reason)
    flag_id = process_serialized(command, review_key(review_id))
    return FlagIdResponse(flag_id=flag_id)


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------
@moderation_router.get("/flags", response_model=list[FlagResponse])
async def list_flags(
    status: str | None = "PENDING",
    principal: Principal = Depends(moderator_principal),
) -> list[FlagResponse]:
    return [FlagResponse.from_flag(f) for f in flags(status)]


@moderation_router.put("/flags/{flag_id}/resolve", response_model=StatusResponse)
async def resolve_flag(
    flag_id: str,
    body: ResolveFlagRequest,
    principal: Principal = Depends(moderator_principal),
) -> StatusResponse:
    command = ResolveFlag(
        flag_id=flag_id,
        moderator_id=principal.user_id,
        moderator_role=principal.role.value,
        action=body.action.upper(),
        notes=body.notes,
    )
    status = process_serialized(command, flag_key(flag_id))
    return StatusResponse(status=status)


@moderation_router.put("/reviews/{review_id}/hide", response_model=StatusResponse)
async def hide_review(
    review_id: str,
    body: ModerationReasonRequest,
    principal: Principal = Depends(moderator_principal),
) -> StatusResponse:
    command = HideReview(
        review_id=review_id,
        moderator_id=principal.user_id,
        moderator_role=principal.role.value,
        reason=body.reason,
    )
    process_serialized(command, review_key(review_id))
    return StatusResponse()


@moderation_router.delete("/reviews/{review_id}", response_model=StatusResponse)
async def delete_review_by_admin(
    review_id: str,
    body: ModerationReasonRequest,
    principal: Principal = Depends(moderator_principal),
) -> StatusResponse:
    command = DeleteReviewByAdmin(
        review_id=review_id,
        moderator_id=principal.user_id,
        moderator_role=principal.role.value,
        reason=body.reason,
    )
    process_serialized(command, review_key(review_id))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Points and rewards
# ---------------------------------------------------------------------------
@points_router.get("/me", response_model=PointsResponse)
async def my_points(principal: Principal = Depends(current_principal)) -> PointsResponse:
    balance = points_balance(principal.user_id)
    return PointsResponse(
        user_id=balance.user_id,
        total_points=balance.total_points,
        redeemed_points=balance.redeemed_points,
        last_updated=balance.last_updated,
    )


@points_router.post("/redeem", response_model=PointsResponse)
async def redeem_points(
    body: RedeemPointsRequest,
    principal: Principal = Depends(current_principal),
) -> PointsResponse:
    command = RedeemPoints(user_id=principal.user_id, amount=body.amount)
    process_serialized(command, points_key(principal.user_id))
    return await my_points(principal)


@rewards_router.get("", response_model=list[RewardResponse])
async def list_rewards() -> list[RewardResponse]:
    return [
        RewardResponse(
            id=str(r.id),
            name=r.name,
            description=r.description,
            points_required=r.points_required,
        )
        for r in available_rewards()
    ]


@rewards_router.post("", status_code=201, response_model=RewardIdResponse)
async def add_reward(
    body: AddRewardRequest,
    principal: Principal = Depends(moderator_principal),
) -> RewardIdResponse:
    command = AddReward(
        name=body.name,
        description=body.description,
        points_required=body.points_required,
    )
    reward_id = current_domain.process(command, asynchronous=False)
    return RewardIdResponse(reward_id=reward_id)


@rewards_router.post("/{reward_id}/redeem", response_model=PointsResponse)
async def redeem_reward(
    reward_id: str,
    principal: Principal = Depends(current_principal),
) -> PointsResponse:
    command = RedeemReward(user_id=principal.user_id, reward_id=reward_id)
    process_serialized(command, points_key(principal.user_id))
    return await my_points(principal)
