from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(StrEnum):
    restaurant = "restaurant"
    hotel = "hotel"
    attraction = "attraction"
    activity = "activity"


class Difficulty(StrEnum):
    easy = "Easy"
    moderate = "Moderate"
    challenging = "Challenging"
    expert = "Expert"


class VenueModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(VenueModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ScrapedData(VenueModel):
    name: str
    address: str | None = None
    phone: str | None = None  # digits only, 0XX... normalized to 27XX...
    website: str | None = None
    description: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    images: list[str] = []
    coordinates: Coordinates | None = None


class RestaurantData(ScrapedData):
    category: Literal["restaurant"] = "restaurant"
    cuisine: list[str] = []
    price_range: str | None = None  # "$" .. "$$$$"
    features: list[str] = []
    opening_hours: dict[str, str] | None = None


class RoomType(VenueModel):
    type: str = Field(min_length=1)
    price: float = Field(gt=0)
    amenities: list[str] = []


class HotelData(ScrapedData):
    category: Literal["hotel"] = "hotel"
    star_rating: int | None = Field(default=None, ge=1, le=5)
    room_types: list[RoomType] = []
    amenities: list[str] = []
    check_in: str | None = None  # HH:MM
    check_out: str | None = None  # HH:MM
    cancellation_policy: str | None = None


class TicketPrice(VenueModel):
    type: str = Field(min_length=1)
    price: float = Field(gt=0)
    description: str | None = None


class AttractionData(ScrapedData):
    category: Literal["attraction"] = "attraction"
    ticket_prices: list[TicketPrice] = []
    opening_hours: dict[str, str] | None = None
    best_time_to_visit: str | None = None
    duration: str | None = None
    accessibility: list[str] = []
    facilities: list[str] = []


class ActivityData(ScrapedData):
    category: Literal["activity"] = "activity"
    duration: str | None = None
    group_size: str | None = None
    difficulty: Difficulty | None = None
    age_restriction: str | None = None
    included: list[str] = []
    requirements: list[str] = []
    best_time: str | None = None


VenueData = Annotated[
    RestaurantData | HotelData | AttractionData | ActivityData,
    Field(discriminator="category"),
]
