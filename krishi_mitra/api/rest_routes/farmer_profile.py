from fastapi import APIRouter, status
from pydantic import BaseModel

from krishi_mitra.models.farmer_profile import (
    IRRIGATION_METHODS,
    SOIL_TYPES,
    ActivityType,
    FarmerProfile,
)

router = APIRouter(tags=["Farmer Profile"])


class ProfileOptions(BaseModel):
    soil_types: list[str]
    irrigation_methods: list[str]
    activity_types: list[str]


@router.get("/profile-options", response_model=ProfileOptions)
async def profile_options():
    """
    Choices offered by the onboarding and activity log forms.
    """
    return ProfileOptions(
        soil_types=SOIL_TYPES,
        irrigation_methods=IRRIGATION_METHODS,
        activity_types=[activity_type.value for activity_type in ActivityType],
    )


@router.post(
    "/farmer-profile/validate",
    response_model=FarmerProfile,
    status_code=status.HTTP_200_OK,
    summary="Validate a farmer profile",
)
async def validate_farmer_profile(profile: FarmerProfile):
    """
    Checks the onboarding form. Invalid profiles are rejected with 422.
    """
    return profile
