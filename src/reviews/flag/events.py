"""Domain events for the ReviewFlag aggregate."""

from protean.fields import DateTime, Identifier, Text

from reviews.domain import reviews


@reviews.event(part_of="ReviewFlag")
class ReviewFlagged:
    """A user flagged a review for moderator attention."""

    __version__ = 1

    flag_id = Identifier(required=True)
    review_id = Identifier(required=True)
    flagger_id = Identifier(required=True)
    reason = Text(required=True)
    flagged_at = DateTime(required=True)


@reviews.event(part_of="ReviewFlag")
class FlagResolved:
    """A moderator upheld a flag."""

    __version__ = 1

    flag_id = Identifier(required=True)
    review_id = Identifier(required=True)
    resolved_by = Identifier(required=True)
    admin_notes = Text()
    resolved_at = DateTime(required=True)


@reviews.event(part_of="ReviewFlag")
class FlagDismissed:
    """A moderator dismissed a flag without action."""

    __version__ = 1

    flag_id = Identifier(required=True)
    review_id = Identifier(required=True)
    resolved_by = Identifier(required=True)
    admin_notes = Text()
    resolved_at = DateTime(required=True)
