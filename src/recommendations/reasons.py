"""Short human-readable explanation shown next to a recommendation."""

SEPARATOR = " • "
FALLBACK = "Recommended for you"
MAX_TAG_REASONS = 2

_DISTANCE_PHRASES = ((0.5, "Near you"), (1.0, "Close by"), (2.0, "Within walking distance"))


def reason_for(eatery, distance_km) -> str:
    parts = []
    if distance_km is not None:
        for upper, phrase in _DISTANCE_PHRASES:
            if distance_km < upper:
                parts.append(phrase)
                break

    parts.extend(f"{tag} option" for tag in eatery.tags[:MAX_TAG_REASONS])
    return SEPARATOR.join(parts) if parts else FALLBACK
