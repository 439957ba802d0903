"""Closed value sets used by entity fields."""

from enum import Enum


class AccommodationType(str, Enum):
    APARTMENT = "APARTMENT"
    HOUSE = "HOUSE"
    COUNTRY_HOUSE = "COUNTRY_HOUSE"
    CABIN = "CABIN"
    HOTEL = "HOTEL"
    HOSTEL = "HOSTEL"
    CAMPING = "CAMPING"
    ROOM = "ROOM"
    MOTEL = "MOTEL"
    RESORT = "RESORT"


class EventCategory(str, Enum):
    MUSIC = "MUSIC"
    CULTURE = "CULTURE"
    SPORTS = "SPORTS"
    GASTRONOMY = "GASTRONOMY"
    FESTIVAL = "FESTIVAL"
    NATURE = "NATURE"
    THEATER = "THEATER"
    WORKSHOP = "WORKSHOP"
    OTHER = "OTHER"


class PostCategory(str, Enum):
    EVENTS = "EVENTS"
    CULTURE = "CULTURE"
    GASTRONOMY = "GASTRONOMY"
    NATURE = "NATURE"
    TOURISM = "TOURISM"
    GENERAL = "GENERAL"
    SPORT = "SPORT"
    CARNIVAL = "CARNIVAL"
    NIGHTLIFE = "NIGHTLIFE"
    HISTORY = "HISTORY"
    TRADITIONS = "TRADITIONS"
    WELLNESS = "WELLNESS"
    FAMILY = "FAMILY"
    TIPS = "TIPS"
    ART = "ART"
    BEACH = "BEACH"
    RURAL = "RURAL"
    FESTIVALS = "FESTIVALS"


class PaymentStatus(str, Enum):
    """Payment statuses as reported by the payment provider."""

    PENDING = "pending"
    APPROVED = "approved"
    AUTHORIZED = "authorized"
    IN_PROCESS = "in_process"
    IN_MEDIATION = "in_mediation"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    CHARGED_BACK = "charged_back"


class PaymentType(str, Enum):
    ONE_TIME = "one_time"
    SUBSCRIPTION = "subscription"
