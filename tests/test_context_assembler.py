import base64

import pytest
from pydantic import ValidationError

from krishi_mitra.models.chat import ChatTurn, ImageUpload, Role
from krishi_mitra.services.context_assembler import (
    RECENT_ACTIVITY_LIMIT,
    assemble_context,
    recent_activities,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def test_recent_activities_keeps_the_last_five_in_stored_order(activity_logs):
    recent = recent_activities(activity_logs)

    assert len(recent) == RECENT_ACTIVITY_LIMIT
    assert [log.id for log in recent] == [log.id for log in activity_logs[-5:]]


def test_recent_activities_short_and_empty_histories(activity_logs):
    assert recent_activities(activity_logs[:2]) == tuple(activity_logs[:2])
    assert recent_activities([]) == ()
    assert recent_activities(None) == ()


def test_history_drops_system_turns_and_keeps_order(profile):
    history = [
        ChatTurn(role=Role.MODEL, content="Namaste!"),
        ChatTurn(role=Role.SYSTEM, content="internal note"),
        ChatTurn(role=Role.USER, content="When should I irrigate?"),
        ChatTurn(role=Role.MODEL, content="Tomorrow morning."),
    ]

    bundle = assemble_context(profile, history=history, message="Thanks")

    assert [turn.content for turn in bundle.history] == [
        "Namaste!",
        "When should I irrigate?",
        "Tomorrow morning.",
    ]
    assert len(history) == 4


def test_image_is_decoded_to_bytes_and_mime_type(profile):
    upload = ImageUpload(base64=base64.b64encode(PNG_BYTES).decode(), mime_type="image/png")

    bundle = assemble_context(profile, message="What is this spot?", image=upload)

    assert bundle.image.data == PNG_BYTES
    assert bundle.image.mime_type == "image/png"


def test_image_from_data_url_takes_mime_type_from_header():
    encoded = base64.b64encode(PNG_BYTES).decode()

    upload = ImageUpload.model_validate({"data": f"data:image/png;base64,{encoded}"})

    assert upload.mime_type == "image/png"
    assert upload.decode().data == PNG_BYTES


def test_invalid_base64_image_is_rejected():
    with pytest.raises(ValidationError):
        ImageUpload(base64="not base64 at all!", mime_type="image/png")


def test_location_and_crop_default_to_profile(profile):
    bundle = assemble_context(profile)

    assert bundle.location == profile.location
    assert bundle.crop == profile.main_crop


def test_bundle_is_immutable(profile):
    bundle = assemble_context(profile, message="hello")

    with pytest.raises(ValidationError):
        bundle.message = "changed"
