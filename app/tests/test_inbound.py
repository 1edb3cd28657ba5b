import pytest

from app.core.errors import ValidationError
from app.core.models import InboundMessage


def test_from_payload_applies_default_language():
    message = InboundMessage.from_payload({"user_id": "42", "text": "hi"}, default_language="de")

    assert message.user_id == "42"
    assert message.text == "hi"
    assert message.language_code == "de"


def test_from_payload_coerces_numbers_to_strings():
    message = InboundMessage.from_payload({"user_id": 42, "text": 7, "language_code": "fr"})

    assert message.user_id == "42"
    assert message.text == "7"
    assert message.language_code == "fr"


@pytest.mark.parametrize("language_code", [None, "", 12])
def test_from_payload_ignores_unusable_language(language_code):
    message = InboundMessage.from_payload({"user_id": "1", "text": "x", "language_code": language_code})
    assert message.language_code == "en"


@pytest.mark.parametrize(
    "body, expected",
    [
        (None, "Missing user_id or text"),
        ("plain text", "Missing user_id or text"),
        ({"user_id": "", "text": "hi"}, "Missing user_id"),
        ({"user_id": "1", "text": None}, "Missing text"),
        ({"user_id": {"id": 1}, "text": "hi"}, "Invalid user_id"),
        ({"user_id": "1", "text": ["a"]}, "Invalid text"),
    ],
)
def test_from_payload_rejects_bad_shapes(body, expected):
    with pytest.raises(ValidationError) as exc_info:
        InboundMessage.from_payload(body)

    assert str(exc_info.value) == expected


def test_from_payload_defaults_to_configured_language(monkeypatch):
    monkeypatch.setattr("app.core.models.settings.default_language_code", "pt-BR")

    message = InboundMessage.from_payload({"user_id": "1", "text": "oi"})

    assert message.language_code == "pt-BR"
