import datetime
from enum import Enum
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

SOIL_TYPES = ["Loamy", "Clay", "Sandy", "Silty", "Peaty", "Chalky"]
IRRIGATION_METHODS = ["Rain-fed", "Canal", "Drip", "Sprinkler", "Well/Tube Well"]


class FarmerProfile(BaseModel):
    """Profile collected from the farmer during onboarding."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Full name of the farmer.")
    location: str = Field(..., description="Village, district and state.")
    land_size: float = Field(
        ...,
        gt=0,
        description="Land size in acres.",
        validation_alias=AliasChoices("land_size", "landSize"),
    )
    main_crop: str = Field(
        ...,
        description="Main crop grown on the farm.",
        validation_alias=AliasChoices("main_crop", "mainCrop"),
    )
    soil_type: str = Field(
        default="Loamy",
        description=f"One of {', '.join(SOIL_TYPES)}.",
        validation_alias=AliasChoices("soil_type", "soilType"),
    )
    irrigation_method: str = Field(
        default="Rain-fed",
        description=f"One of {', '.join(IRRIGATION_METHODS)}.",
        validation_alias=AliasChoices("irrigation_method", "irrigationMethod"),
    )

    @field_validator("name", "location", "main_crop")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value


class ActivityType(str, Enum):
    SOWING = "Sowing"
    IRRIGATION = "Irrigation"
    FERTILIZATION = "Fertilization"
    PEST_CONTROL = "Pest Control"
    HARVESTING = "Harvesting"
    OBSERVATION = "Observation"


class ActivityLog(BaseModel):
    """A single farm activity logged by the farmer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    date: datetime.date = Field(..., description="Date in YYYY-MM-DD format")
    activity_type: ActivityType = Field(
        ...,
        validation_alias=AliasChoices("activity_type", "activityType"),
    )
    notes: str = Field(default="")
