import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, TypeAdapter

from krishi_mitra.core.config import settings
from krishi_mitra.core.genai_client import GenAIClientProvider, get_client_provider
from krishi_mitra.models.advisory import (
    PriceTrendData,
    RequestKind,
    SchemeReminder,
    SmartAlert,
    WeatherForecast,
)
from krishi_mitra.models.chat import ChatTurn, ImageUpload, InlineImage
from krishi_mitra.models.farmer_profile import ActivityLog, FarmerProfile
from krishi_mitra.models.result import (
    INVALID_RESPONSE_MESSAGE,
    AvailabilityError,
    MediatorResult,
    ServiceError,
)

from .context_assembler import ContextBundle, assemble_context
from .genai_invoker import SamplingParams, SchemaConstrainedInvoker, select_model
from .prompt_builder import PROMPT_BUILDERS, PromptClock, PromptTemplateFn
from .result_normalizer import normalize_structured, normalize_text

logger = logging.getLogger(__name__)

ActivitySource = Callable[[], Awaitable[List[ActivityLog]]]

CHAT_FAILURE_MESSAGE = (
    "Sorry, I'm having trouble connecting to the AI service. "
    "Please check your connection or API key and try again."
)


class RequestKindSpec(BaseModel):
    """Everything that differs between request kinds."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: RequestKind
    build_prompt: PromptTemplateFn
    failure_message: str
    schema_adapter: Optional[TypeAdapter] = None
    response_json_schema: Optional[dict[str, Any]] = None
    select_model: Callable[[Optional[InlineImage]], str] = select_model
    sampling: Optional[SamplingParams] = None


def _structured(kind: RequestKind, schema: Any, failure_message: str) -> RequestKindSpec:
    adapter = TypeAdapter(schema)
    return RequestKindSpec(
        kind=kind,
        build_prompt=PROMPT_BUILDERS[kind],
        failure_message=failure_message,
        schema_adapter=adapter,
        response_json_schema=adapter.json_schema(),
    )


REQUEST_KIND_SPECS: dict[RequestKind, RequestKindSpec] = {
    RequestKind.CHAT: RequestKindSpec(
        kind=RequestKind.CHAT,
        build_prompt=PROMPT_BUILDERS[RequestKind.CHAT],
        failure_message=CHAT_FAILURE_MESSAGE,
        sampling=SamplingParams(
            temperature=settings.CHAT_TEMPERATURE,
            top_p=settings.CHAT_TOP_P,
        ),
    ),
    RequestKind.WEATHER: _structured(
        RequestKind.WEATHER, WeatherForecast, "Could not fetch weather data."
    ),
    RequestKind.PRICE_TREND: _structured(
        RequestKind.PRICE_TREND, PriceTrendData, "Could not fetch price trend data."
    ),
    RequestKind.SCHEMES: _structured(
        RequestKind.SCHEMES, List[SchemeReminder], "Could not fetch scheme reminders."
    ),
    RequestKind.ALERTS: _structured(
        RequestKind.ALERTS, List[SmartAlert], "Could not fetch smart alerts."
    ),
}


class AdvisoryMediator:
    """
    Runs every advisory request through the same pipeline:
    assemble context, build the prompt, call Gemini, normalize the reply.

    Public methods never raise. They return `Success`, `ServiceError` or
    `AvailabilityError`.
    """

    def __init__(
        self,
        client_provider: Optional[GenAIClientProvider] = None,
        activity_source: Optional[ActivitySource] = None,
        clock: Optional[Callable[[], PromptClock]] = None,
        specs: Optional[dict[RequestKind, RequestKindSpec]] = None,
    ) -> None:
        self._invoker = SchemaConstrainedInvoker(client_provider or get_client_provider())
        self._activity_source = activity_source
        self._clock = clock or PromptClock.current
        self._specs = specs or REQUEST_KIND_SPECS

    async def converse(
        self,
        profile: FarmerProfile,
        history: Sequence[ChatTurn],
        new_message: str,
        image: Optional[ImageUpload] = None,
        activity_history: Optional[Sequence[ActivityLog]] = None,
    ) -> MediatorResult:
        if activity_history is None:
            activity_history = await self.stored_activities()
        return await self._run(
            RequestKind.CHAT,
            lambda: assemble_context(
                profile,
                activity_history=activity_history,
                history=history,
                message=new_message,
                image=image,
            ),
        )

    async def weather_forecast(self, location: str) -> MediatorResult:
        return await self._run(
            RequestKind.WEATHER,
            lambda: assemble_context(location=location),
        )

    async def price_trend(self, crop: str, location: str) -> MediatorResult:
        return await self._run(
            RequestKind.PRICE_TREND,
            lambda: assemble_context(crop=crop, location=location),
        )

    async def scheme_reminders(self, profile: FarmerProfile) -> MediatorResult:
        return await self._run(
            RequestKind.SCHEMES,
            lambda: assemble_context(profile),
        )

    async def smart_alerts(
        self,
        profile: FarmerProfile,
        activity_history: Optional[Sequence[ActivityLog]] = None,
    ) -> MediatorResult:
        return await self._run(
            RequestKind.ALERTS,
            lambda: assemble_context(profile, activity_history=activity_history),
        )

    async def stored_activities(self) -> List[ActivityLog]:
        if self._activity_source is None:
            return []
        try:
            return list(await self._activity_source())
        except Exception:
            logger.warning(
                "Failed to load activity logs; continuing without them.",
                exc_info=True,
            )
            return []

    async def _run(
        self,
        kind: RequestKind,
        assemble: Callable[[], ContextBundle],
    ) -> MediatorResult:
        spec = self._specs[kind]
        try:
            bundle = assemble()
            built = spec.build_prompt(bundle, self._clock())
            raw = await self._invoker.invoke(
                built,
                model=spec.select_model(bundle.image),
                failure_message=spec.failure_message,
                history=bundle.history,
                image=bundle.image,
                response_json_schema=spec.response_json_schema,
                sampling=spec.sampling,
            )
        except Exception:
            logger.exception("Advisory request '%s' failed before reaching the model", kind.value)
            return ServiceError(message=spec.failure_message)

        if isinstance(raw, (ServiceError, AvailabilityError)):
            return raw
        try:
            if spec.schema_adapter is None:
                return normalize_text(raw.text, spec.failure_message)
            return normalize_structured(raw.text, spec.schema_adapter)
        except Exception:
            logger.exception("Could not normalize the '%s' response", kind.value)
            return ServiceError(message=INVALID_RESPONSE_MESSAGE)
