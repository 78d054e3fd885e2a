from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

API_KEY_ERROR_MESSAGE = "AI service is not configured. An API key is required."
INVALID_RESPONSE_MESSAGE = "Received an invalid response from the AI service."


class Success(BaseModel):
    status: Literal["success"] = "success"
    payload: Any = Field(..., description="Reply text or the validated structured data.")

    @property
    def ok(self) -> bool:
        return True


class ServiceError(BaseModel):
    """The backend was reachable but the request failed or returned unusable data."""

    status: Literal["service_error"] = "service_error"
    message: str

    @property
    def ok(self) -> bool:
        return False


class AvailabilityError(BaseModel):
    """No credential is configured, so the backend was never contacted."""

    status: Literal["availability_error"] = "availability_error"
    message: str = API_KEY_ERROR_MESSAGE

    @property
    def ok(self) -> bool:
        return False


MediatorResult = Annotated[
    Union[Success, ServiceError, AvailabilityError],
    Field(discriminator="status"),
]
