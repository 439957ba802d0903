"""Rating dimensions scored by reviews."""

ACCOMMODATION_RATING_FIELDS: tuple[str, ...] = (
    "cleanliness",
    "hospitality",
    "services",
    "accuracy",
    "communication",
    "location",
)

DESTINATION_RATING_FIELDS: tuple[str, ...] = (
    "landscape",
    "attractions",
    "accessibility",
    "safety",
    "cleanliness",
    "hospitality",
    "cultural_offer",
    "gastronomy",
    "affordability",
    "nightlife",
    "infrastructure",
    "environmental_care",
    "wifi_availability",
    "shopping",
    "beaches",
    "green_spaces",
    "local_events",
    "weather_satisfaction",
)

MIN_SCORE = 1
MAX_SCORE = 5
