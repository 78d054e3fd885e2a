import datetime as dt
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


# --- Weather ---


class WeatherDay(BaseModel):
    """Forecast for a single day."""

    day: str = Field(..., description="Day label, e.g. 'Monday'.")
    temp_high: float = Field(..., description="High temperature in Celsius.")
    temp_low: float = Field(..., description="Low temperature in Celsius.")
    condition: str = Field(..., description="Short weather condition, e.g. 'Sunny'.")
    precipitation_chance: float = Field(
        ..., ge=0, le=100, description="Chance of precipitation in percent."
    )


class WeatherForecast(BaseModel):
    location: str
    forecast: List[WeatherDay] = Field(..., description="Ordered daily forecast.")


# --- Market prices ---


class PriceDataPoint(BaseModel):
    date: dt.date = Field(..., description="Date in YYYY-MM-DD format")
    price: float = Field(..., description="Price in INR per quintal")


class PriceTrendData(BaseModel):
    crop: str
    location: str
    historical: List[PriceDataPoint] = Field(
        ..., description="Last 30 days of price data."
    )
    predicted: List[PriceDataPoint] = Field(
        ..., description="Next 7 days of predicted price data."
    )
    summary: str = Field(..., description="A brief summary of the price trend.")


# --- Government schemes ---


class SchemeReminder(BaseModel):
    scheme_name: str
    description: str
    eligibility: str
    deadline: dt.date = Field(..., description="Date in YYYY-MM-DD format")
    application_link: str = Field(..., description="A placeholder URL")


# --- Alerts ---


class AlertPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


PRIORITY_RANK = {
    AlertPriority.HIGH: 3,
    AlertPriority.MEDIUM: 2,
    AlertPriority.LOW: 1,
}


class SmartAlert(BaseModel):
    id: str = Field(..., description="A unique identifier, e.g., 'alert-1'")
    title: str
    message: str
    priority: AlertPriority = Field(..., description="Can be 'High', 'Medium', or 'Low'")
    timestamp: dt.datetime = Field(..., description="Current timestamp in ISO format")


def rank_alerts(alerts: List[SmartAlert], limit: int | None = None) -> List[SmartAlert]:
    """Highest priority first; the sort is stable within a priority."""
    ranked = sorted(alerts, key=lambda alert: PRIORITY_RANK[alert.priority], reverse=True)
    return ranked if limit is None else ranked[:limit]


class RequestKind(str, Enum):
    CHAT = "chat"
    WEATHER = "weather"
    PRICE_TREND = "price_trend"
    SCHEMES = "schemes"
    ALERTS = "alerts"
