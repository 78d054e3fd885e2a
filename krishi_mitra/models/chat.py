import base64
import binascii
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class Role(str, Enum):
    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


CONVERSATION_ROLES = {Role.USER, Role.MODEL}
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class AttachedImage(BaseModel):
    """Image as sent by the client: base64 text, optionally a data: URL."""

    model_config = ConfigDict(frozen=True)

    encoded: str = Field(
        ...,
        validation_alias=AliasChoices("base64", "data"),
    )
    mime_type: str = Field(
        default=DEFAULT_IMAGE_MIME_TYPE,
        validation_alias=AliasChoices("mime_type", "mimeType"),
    )

    @model_validator(mode="before")
    @classmethod
    def _split_data_url(cls, values):
        if not isinstance(values, dict):
            return values
        raw = values.get("base64") or values.get("data")
        if isinstance(raw, str) and raw.startswith("data:") and "," in raw:
            header, encoded = raw.split(",", 1)
            values = {k: v for k, v in values.items() if k not in {"base64", "data"}}
            values["base64"] = encoded
            mime = header[len("data:"):].split(";", 1)[0]
            if mime and not (values.get("mime_type") or values.get("mimeType")):
                values["mime_type"] = mime
        return values


class ImageUpload(AttachedImage):
    """An attached image that is about to be sent to the model."""

    @model_validator(mode="after")
    def _check_encoding(self):
        try:
            base64.b64decode(self.encoded, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("image data is not valid base64")
        return self

    def decode(self) -> "InlineImage":
        return InlineImage(
            data=base64.b64decode(self.encoded, validate=True),
            mime_type=self.mime_type,
        )


class InlineImage(BaseModel):
    """Decoded image bytes ready to be sent to the model as an inline part."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = ""
    # Kept as sent; earlier turns are replayed to the model as text only.
    image: Optional[AttachedImage] = None
