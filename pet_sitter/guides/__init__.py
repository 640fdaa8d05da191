"""照看指南及其从属数据。"""
from pet_sitter.guides.models import (
    CheatSheet,
    EmergencyContact,
    FlightInfo,
    Guide,
    HomeCare,
    HomeInfo,
    HotelInfo,
    TaskCompletion,
    TravelItinerary,
)

__all__ = [
    "Guide",
    "EmergencyContact",
    "HomeInfo",
    "TravelItinerary",
    "FlightInfo",
    "HotelInfo",
    "HomeCare",
    "TaskCompletion",
    "CheatSheet",
]
