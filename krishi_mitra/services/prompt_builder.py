from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict

from krishi_mitra.models.advisory import RequestKind
from krishi_mitra.models.farmer_profile import ActivityLog, FarmerProfile
from krishi_mitra.prompts.chat_system_prompt import CHAT_GREETING, CHAT_SYSTEM_PROMPT
from krishi_mitra.prompts.price_trend_prompt import PRICE_TREND_PROMPT
from krishi_mitra.prompts.scheme_prompt import SCHEME_REMINDER_PROMPT
from krishi_mitra.prompts.smart_alerts_prompt import SMART_ALERTS_PROMPT
from krishi_mitra.prompts.weather_prompt import WEATHER_FORECAST_PROMPT

from .context_assembler import ContextBundle

PRICE_HISTORY_DAYS = 30
PRICE_PREDICTION_DAYS = 7
NO_RECENT_ACTIVITIES = "No recent activities logged."

_chat_system_template = PromptTemplate.from_template(CHAT_SYSTEM_PROMPT)
_greeting_template = PromptTemplate.from_template(CHAT_GREETING)
_weather_template = PromptTemplate.from_template(WEATHER_FORECAST_PROMPT)
_price_trend_template = PromptTemplate.from_template(PRICE_TREND_PROMPT)
_scheme_template = PromptTemplate.from_template(SCHEME_REMINDER_PROMPT)
_alerts_template = PromptTemplate.from_template(SMART_ALERTS_PROMPT)


class BuiltPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    system_instruction: Optional[str] = None


class PromptClock(BaseModel):
    """The only time inputs a prompt may depend on."""

    model_config = ConfigDict(frozen=True)

    today: date
    now: datetime

    @classmethod
    def current(cls) -> "PromptClock":
        now = datetime.now(timezone.utc)
        return cls(today=now.date(), now=now)


def format_land_size(land_size: float) -> str:
    return f"{land_size:g}"


def format_activities(activities: Sequence[ActivityLog]) -> str:
    lines = [
        f"- On {log.date.isoformat()}, action: {log.activity_type.value}, notes: {log.notes}"
        for log in activities
    ]
    return "\n".join(lines) or NO_RECENT_ACTIVITIES


def _profile_fields(profile: FarmerProfile) -> dict:
    return {
        "name": profile.name,
        "location": profile.location,
        "land_size": format_land_size(profile.land_size),
        "main_crop": profile.main_crop,
        "soil_type": profile.soil_type,
        "irrigation_method": profile.irrigation_method,
    }


def _require_profile(bundle: ContextBundle) -> FarmerProfile:
    if bundle.profile is None:
        raise ValueError("This request kind needs a farmer profile.")
    return bundle.profile


def build_chat_prompt(bundle: ContextBundle, clock: PromptClock) -> BuiltPrompt:
    system_instruction = _chat_system_template.format(
        **_profile_fields(_require_profile(bundle)),
        recent_activities=format_activities(bundle.recent_activities),
    )
    return BuiltPrompt(prompt=bundle.message or "", system_instruction=system_instruction)


def build_weather_prompt(bundle: ContextBundle, clock: PromptClock) -> BuiltPrompt:
    return BuiltPrompt(prompt=_weather_template.format(location=bundle.location))


def build_price_trend_prompt(bundle: ContextBundle, clock: PromptClock) -> BuiltPrompt:
    start_date = clock.today - timedelta(days=PRICE_HISTORY_DAYS)
    return BuiltPrompt(
        prompt=_price_trend_template.format(
            crop=bundle.crop,
            location=bundle.location,
            history_days=PRICE_HISTORY_DAYS,
            prediction_days=PRICE_PREDICTION_DAYS,
            start_date=start_date.isoformat(),
            end_date=clock.today.isoformat(),
        )
    )


def build_scheme_prompt(bundle: ContextBundle, clock: PromptClock) -> BuiltPrompt:
    return BuiltPrompt(
        prompt=_scheme_template.format(**_profile_fields(_require_profile(bundle)))
    )


def build_alerts_prompt(bundle: ContextBundle, clock: PromptClock) -> BuiltPrompt:
    return BuiltPrompt(
        prompt=_alerts_template.format(
            **_profile_fields(_require_profile(bundle)),
            recent_activities=format_activities(bundle.recent_activities),
            generated_at=clock.now.isoformat(),
        )
    )


PromptTemplateFn = Callable[[ContextBundle, PromptClock], BuiltPrompt]

PROMPT_BUILDERS: dict[RequestKind, PromptTemplateFn] = {
    RequestKind.CHAT: build_chat_prompt,
    RequestKind.WEATHER: build_weather_prompt,
    RequestKind.PRICE_TREND: build_price_trend_prompt,
    RequestKind.SCHEMES: build_scheme_prompt,
    RequestKind.ALERTS: build_alerts_prompt,
}


def build_prompt(
    kind: RequestKind,
    bundle: ContextBundle,
    clock: Optional[PromptClock] = None,
) -> BuiltPrompt:
    return PROMPT_BUILDERS[kind](bundle, clock or PromptClock.current())


def build_greeting(name: str, main_crop: str) -> str:
    return _greeting_template.format(name=name, main_crop=main_crop)
