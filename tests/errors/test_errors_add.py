import pytest

from errata.config import ErrataConfig
from errata.core import Model, StringField
from errata.errors import BASE, Detail, Errors, FailureEntry
from errata.exceptions import ErrataError, ErrorKind


class Person(Model):
    name = StringField()
    email = StringField(label="E-mail address")


def make_errors(**kwargs):
    return Errors(Person(), config=ErrataConfig(), **kwargs)


def test_add_message_is_deduplicated():
    errors = make_errors()
    errors.add("name", "is taken")
    errors.add("name", "is taken")
    assert errors.messages == {"name": ["is taken"]}
    assert len(errors) == 1


def test_add_detail_generates_message_and_dedups():
    errors = make_errors()
    first = errors.add("name", code="too_short", options={"count": 3})
    second = errors.add("name", code="too_short", options={"count": 3})
    assert first is second
    assert errors.messages == {"name": ["is too short (minimum is 3 characters)"]}
    assert errors.details == {"name": [Detail("too_short", {"count": 3})]}


def test_add_detail_with_different_options_keeps_both():
    errors = make_errors()
    errors.add("name", code="too_short", options={"count": 3})
    errors.add("name", code="too_short", options={"count": 5})
    assert len(errors.messages_for("name")) == 2


def test_explicit_message_overrides_generated_text():
    errors = make_errors()
    errors.add("name", "needs more letters", code="too_short", options={"count": 3})
    errors.add("email", code="blank", options={"message": "is required here"})
    assert errors["name"] == ["needs more letters"]
    assert errors["email"] == ["is required here"]
    assert errors.details["email"] == [Detail("blank")]


def test_unknown_code_falls_back_to_humanized_code():
    errors = make_errors()
    errors.add("name", code="not_shouty")
    assert errors["name"] == ["not shouty"]


def test_added_checks_messages_and_details():
    errors = make_errors()
    errors.add("name", code="blank")
    errors.add("email", "looks odd")
    assert errors.added("name", code="blank")
    assert errors.added("name", "can't be blank")
    assert errors.added("email", "looks odd")
    assert not errors.added("email", code="blank")
    assert not errors.added("name", code="blank", options={"message": "other"})


def test_detail_without_code_degrades_to_message_only():
    entry = FailureEntry("is invalid", Detail(None, {"value": 1}))
    assert entry.detail is None
    assert entry.code is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"code": 5},
        {"code": ""},
        {"code": "blank", "options": {"code": "invalid"}},
        {"code": "blank", "options": {"error": "invalid"}},
        {"code": "blank", "options": ["count"]},
        {"options": {"count": 1}},
        {},
    ],
)
def test_malformed_details_fail_fast(kwargs):
    errors = make_errors()
    with pytest.raises(ErrataError) as excinfo:
        errors.add("name", **kwargs)
    assert excinfo.value.kind is ErrorKind.INVALID_DETAIL
    assert excinfo.value.is_kind(ErrorKind.PROGRAMMER)
    assert not errors


def test_message_template_missing_option_is_invalid_detail():
    errors = make_errors()
    with pytest.raises(ErrataError) as excinfo:
        errors.add("name", code="too_short")
    assert excinfo.value.kind is ErrorKind.INVALID_DETAIL


def test_non_string_attribute_is_rejected():
    errors = make_errors()
    with pytest.raises(ErrataError) as excinfo:
        errors.add(5, "is odd")
    assert excinfo.value.kind is ErrorKind.INVALID_ATTRIBUTE


def test_full_messages_use_labels_and_skip_base():
    errors = make_errors()
    errors.add("name", code="blank")
    errors.add("email", "is invalid")
    errors.add(BASE, "Something went wrong")
    assert errors.full_messages() == [
        "Name can't be blank",
        "E-mail address is invalid",
        "Something went wrong",
    ]
    assert errors.to_dict(full_messages=True)["email"] == ["E-mail address is invalid"]


def test_full_message_format_comes_from_config():
    errors = Errors(Person(), config=ErrataConfig(full_message_format="{attribute}: {message}"))
    assert errors.full_message("name", "is odd") == "Name: is odd"


def test_read_helpers_and_mutation():
    errors = make_errors()
    errors.add("name", code="invalid")
    errors.add("email", "is taken")
    assert "name" in errors
    assert "missing" not in errors
    assert errors.of_kind("name")
    assert not errors.of_kind("email", "taken")
    assert errors.attribute_names() == ["name", "email"]
    assert list(errors) == [
        ("name", FailureEntry("is invalid", Detail("invalid"))),
        ("email", FailureEntry("is taken")),
    ]

    clone = errors.copy()
    assert errors.delete("name") == ["is invalid"]
    assert errors.messages == {"email": ["is taken"]}
    assert clone.messages == {"name": ["is invalid"], "email": ["is taken"]}

    errors.clear()
    assert not errors
    assert errors.messages == {}


def test_recognized_attributes_fall_back_to_attribute_lookup():
    class Plain:
        email = None

    errors = Errors(Plain())
    assert errors.is_recognized_attribute("email")
    assert not errors.is_recognized_attribute("name")
    assert errors.human_attribute_name("first_name") == "First name"


def test_detail_with_existing_plain_message_is_not_duplicated():
    errors = make_errors()
    errors.add("name", "is invalid")
    stored = errors.add("name", code="invalid")
    assert errors.messages == {"name": ["is invalid"]}
    assert stored.detail is None


def test_plain_message_with_existing_detail_is_not_duplicated():
    errors = make_errors()
    errors.add("name", code="blank")
    errors.add("name", "can't be blank")
    assert errors.messages == {"name": ["can't be blank"]}
    assert errors.details == {"name": [Detail("blank")]}
