from eventfinder.data.seed_events import (
    CITIES,
    DEMO_USER_EMAIL,
    EVENT_CATEGORIES,
    PRICE_RANGES,
    SORT_OPTIONS,
    sample_events,
    seed_stores,
)

__all__ = [
    "CITIES",
    "DEMO_USER_EMAIL",
    "EVENT_CATEGORIES",
    "PRICE_RANGES",
    "SORT_OPTIONS",
    "sample_events",
    "seed_stores",
]
