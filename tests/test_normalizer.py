from app.core.models import BackendResult, DisplayMessage, Fragment
from app.core.normalizer import PLACEHOLDER_TEXT, build_payload, fallback_payload, normalize


def test_fragments_are_joined_per_fragment_in_order():
    result = BackendResult(
        fragments=[Fragment(lines=["Hello", "World"]), Fragment(lines=["Bye"])],
        fallback_text="ignored",
    )

    messages, intent = normalize(result)

    assert messages == [DisplayMessage(text="Hello\nWorld"), DisplayMessage(text="Bye")]
    assert intent is None


def test_fallback_text_used_without_fragments():
    messages, _ = normalize(BackendResult(fallback_text="Hi there"))
    assert messages == [DisplayMessage(text="Hi there")]


def test_placeholder_when_nothing_usable():
    messages, _ = normalize(BackendResult())
    assert messages == [DisplayMessage(text=PLACEHOLDER_TEXT)]
    assert PLACEHOLDER_TEXT == "…"


def test_empty_text_fragments_are_skipped():
    result = BackendResult(fragments=[Fragment(lines=[]), Fragment(lines=["Only me"])])

    messages, _ = normalize(result)

    assert messages == [DisplayMessage(text="Only me")]


def test_non_text_fragments_are_dropped_without_flat_fallback():
    # Sind Fragmente vorhanden, wird fulfillment_text nicht mehr betrachtet.
    result = BackendResult(fragments=[Fragment(kind="card")], fallback_text="Hi there")

    messages, _ = normalize(result)

    assert messages == [DisplayMessage(text=PLACEHOLDER_TEXT)]


def test_build_payload_sets_intent_attribute_only_when_present():
    with_intent = build_payload(BackendResult(fallback_text="x", intent_name="order.pizza"))
    without_intent = build_payload(BackendResult(fallback_text="x", intent_name=""))
    custom_key = build_payload(BackendResult(intent_name="greet"), intent_attribute="last_intent")

    assert with_intent.set_attributes == {"df_intent": "order.pizza"}
    assert without_intent.set_attributes == {}
    assert custom_key.set_attributes == {"last_intent": "greet"}


def test_fallback_payload():
    payload = fallback_payload("Sorry")
    assert payload.model_dump() == {"messages": [{"text": "Sorry"}], "set_attributes": {}}
