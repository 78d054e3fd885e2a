from typing import Any, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, model_validator

from krishi_mitra.api.dependencies import get_advisory_mediator
from krishi_mitra.models.advisory import (
    PriceTrendData,
    SchemeReminder,
    SmartAlert,
    WeatherForecast,
    rank_alerts,
)
from krishi_mitra.models.chat import ChatTurn, ImageUpload
from krishi_mitra.models.farmer_profile import ActivityLog, FarmerProfile
from krishi_mitra.models.result import AvailabilityError, MediatorResult, ServiceError
from krishi_mitra.services.advisory_mediator import AdvisoryMediator
from krishi_mitra.services.prompt_builder import build_greeting

router = APIRouter(prefix="/advisory", tags=["Advisory"])

DEFAULT_ALERT_LIMIT = 3


class ChatRequest(BaseModel):
    profile: FarmerProfile
    history: List[ChatTurn] = Field(default_factory=list)
    message: str = ""
    image: Optional[ImageUpload] = None

    @model_validator(mode="after")
    def _require_message_or_image(self):
        if not self.message.strip() and self.image is None:
            raise ValueError("Either a message or an image is required.")
        self.message = self.message.strip()
        return self


class ChatReply(BaseModel):
    status: Literal["success", "service_error", "availability_error"]
    reply: str


class AlertsRequest(BaseModel):
    profile: FarmerProfile
    activity_history: Optional[List[ActivityLog]] = Field(
        default=None,
        description="Defaults to the stored activity logs when omitted.",
    )
    limit: Optional[int] = Field(default=DEFAULT_ALERT_LIMIT, ge=1)


class Greeting(BaseModel):
    message: str


def unwrap_result(result: MediatorResult) -> Any:
    """Maps a mediator result onto the HTTP response."""
    if isinstance(result, AvailabilityError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=result.message,
        )
    if isinstance(result, ServiceError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.message,
        )
    return result.payload


@router.post("/chat", response_model=ChatReply)
async def chat(
    request: ChatRequest,
    mediator: AdvisoryMediator = Depends(get_advisory_mediator),
):
    """
    Sends one chat turn to the assistant. Failures come back as the reply
    text so the conversation view can show them inline.
    """
    result = await mediator.converse(
        profile=request.profile,
        history=request.history,
        new_message=request.message,
        image=request.image,
    )
    reply = result.payload if result.ok else result.message
    return ChatReply(status=result.status, reply=reply)


@router.get("/greeting", response_model=Greeting)
async def greeting(
    name: str = Query(..., min_length=1),
    main_crop: str = Query(..., alias="mainCrop", min_length=1),
):
    return Greeting(message=build_greeting(name=name, main_crop=main_crop))


@router.get("/weather", response_model=WeatherForecast)
async def weather(
    location: str = Query(..., min_length=1, description="Village, district, state"),
    mediator: AdvisoryMediator = Depends(get_advisory_mediator),
):
    """
    Get the 5-day forecast for a location.
    """
    return unwrap_result(await mediator.weather_forecast(location))


@router.get("/price-trend", response_model=PriceTrendData)
async def price_trend(
    crop: str = Query(..., min_length=1),
    location: str = Query(..., min_length=1),
    mediator: AdvisoryMediator = Depends(get_advisory_mediator),
):
    """
    Get 30 days of price history and a 7-day prediction for a crop.
    """
    return unwrap_result(await mediator.price_trend(crop, location))


@router.post("/schemes", response_model=List[SchemeReminder])
async def schemes(
    profile: FarmerProfile,
    mediator: AdvisoryMediator = Depends(get_advisory_mediator),
):
    return unwrap_result(await mediator.scheme_reminders(profile))


@router.post("/alerts", response_model=List[SmartAlert])
async def alerts(
    request: AlertsRequest,
    mediator: AdvisoryMediator = Depends(get_advisory_mediator),
):
    """
    Generate smart alerts, highest priority first.
    """
    activity_history = request.activity_history
    if activity_history is None:
        activity_history = await mediator.stored_activities()

    payload = unwrap_result(
        await mediator.smart_alerts(request.profile, activity_history)
    )
    return rank_alerts(payload, limit=request.limit)
