import logging
from typing import Any, Optional, Union

from google.genai import types
from pydantic import BaseModel, ConfigDict

from krishi_mitra.core.config import settings
from krishi_mitra.core.genai_client import GenAIClientProvider
from krishi_mitra.models.chat import ChatTurn, InlineImage, Role
from krishi_mitra.models.result import AvailabilityError, ServiceError

from .prompt_builder import BuiltPrompt

logger = logging.getLogger(__name__)


class SamplingParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = None
    top_p: Optional[float] = None


class RawText(BaseModel):
    """Text returned by the model, untouched."""

    text: Optional[str] = None


def select_model(image: Optional[InlineImage]) -> str:
    return settings.GEMINI_VISION_MODEL if image is not None else settings.GEMINI_TEXT_MODEL


def build_contents(
    built: BuiltPrompt,
    history: tuple[ChatTurn, ...] = (),
    image: Optional[InlineImage] = None,
) -> list[types.Content]:
    """History turns as text, then the new user turn with the image part first."""
    contents = [
        types.Content(
            role="model" if turn.role == Role.MODEL else "user",
            parts=[types.Part.from_text(text=turn.content)],
        )
        for turn in history
    ]

    user_parts: list[types.Part] = []
    if image is not None:
        user_parts.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
    user_parts.append(types.Part.from_text(text=built.prompt))
    contents.append(types.Content(role="user", parts=user_parts))
    return contents


def build_config(
    built: BuiltPrompt,
    response_json_schema: Optional[dict[str, Any]] = None,
    sampling: Optional[SamplingParams] = None,
) -> Optional[types.GenerateContentConfig]:
    config_kwargs: dict[str, Any] = {}
    if built.system_instruction:
        config_kwargs["system_instruction"] = built.system_instruction
    if response_json_schema is not None:
        config_kwargs["response_mime_type"] = "application/json"
        config_kwargs["response_json_schema"] = response_json_schema
    if sampling is not None:
        if sampling.temperature is not None:
            config_kwargs["temperature"] = sampling.temperature
        if sampling.top_p is not None:
            config_kwargs["top_p"] = sampling.top_p
    return types.GenerateContentConfig(**config_kwargs) if config_kwargs else None


class SchemaConstrainedInvoker:
    """
    Sends one prompt to Gemini and hands back the raw text.

    Every failure is turned into a result value: a missing credential becomes
    `AvailabilityError` before any network I/O, and anything the SDK raises
    becomes `ServiceError` with the caller-supplied user-safe message.
    """

    def __init__(self, client_provider: GenAIClientProvider) -> None:
        self._client_provider = client_provider

    async def invoke(
        self,
        built: BuiltPrompt,
        *,
        model: str,
        failure_message: str,
        history: tuple[ChatTurn, ...] = (),
        image: Optional[InlineImage] = None,
        response_json_schema: Optional[dict[str, Any]] = None,
        sampling: Optional[SamplingParams] = None,
    ) -> Union[RawText, ServiceError, AvailabilityError]:
        client = await self._client_provider.get_client()
        if client is None:
            return AvailabilityError()

        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=build_contents(built, history=history, image=image),
                config=build_config(
                    built,
                    response_json_schema=response_json_schema,
                    sampling=sampling,
                ),
            )
        except Exception:
            logger.exception("Error generating content from Gemini (model=%s)", model)
            return ServiceError(message=failure_message)

        return RawText(text=response.text)
