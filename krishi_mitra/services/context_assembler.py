from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from krishi_mitra.models.chat import CONVERSATION_ROLES, ChatTurn, ImageUpload, InlineImage
from krishi_mitra.models.farmer_profile import ActivityLog, FarmerProfile

RECENT_ACTIVITY_LIMIT = 5


class ContextBundle(BaseModel):
    """Everything one advisory request needs, already normalized."""

    model_config = ConfigDict(frozen=True)

    profile: Optional[FarmerProfile] = None
    location: Optional[str] = None
    crop: Optional[str] = None
    recent_activities: tuple[ActivityLog, ...] = Field(default_factory=tuple)
    history: tuple[ChatTurn, ...] = Field(default_factory=tuple)
    message: Optional[str] = None
    image: Optional[InlineImage] = None


def recent_activities(
    activity_history: Optional[Sequence[ActivityLog]],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> tuple[ActivityLog, ...]:
    """Tail of the history as stored (oldest first). Older entries are dropped."""
    if not activity_history or limit <= 0:
        return ()
    return tuple(activity_history[-limit:])


def conversation_history(history: Optional[Sequence[ChatTurn]]) -> tuple[ChatTurn, ...]:
    if not history:
        return ()
    return tuple(turn for turn in history if turn.role in CONVERSATION_ROLES)


def assemble_context(
    profile: Optional[FarmerProfile] = None,
    *,
    activity_history: Optional[Sequence[ActivityLog]] = None,
    history: Optional[Sequence[ChatTurn]] = None,
    message: Optional[str] = None,
    image: Optional[ImageUpload] = None,
    location: Optional[str] = None,
    crop: Optional[str] = None,
) -> ContextBundle:
    """
    Builds the context bundle for a request. Pure: no network or storage access.

    `location` and `crop` default to the profile's values when a profile is
    given, so the profile-free kinds (weather, price trend) and the profile
    kinds read them from the same place.
    """
    if profile is not None:
        location = location if location is not None else profile.location
        crop = crop if crop is not None else profile.main_crop

    return ContextBundle(
        profile=profile,
        location=location,
        crop=crop,
        recent_activities=recent_activities(activity_history),
        history=conversation_history(history),
        message=message,
        image=image.decode() if image is not None else None,
    )
