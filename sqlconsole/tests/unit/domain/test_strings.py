from __future__ import annotations

import pytest

from sqlconsole.domain.strings import MessageKey, available_languages, load_messages


def test_english_table_covers_every_key() -> None:
    messages = load_messages("en")

    for key in MessageKey:
        assert messages[key]


def test_overrides_replace_single_entries() -> None:
    messages = load_messages("EN", overrides={"msgEmptyQuery": "Type something"})

    assert messages[MessageKey.EMPTY_QUERY] == "Type something"
    assert messages[MessageKey.DISALLOWED_TYPE] == "Only SELECT or INSERT queries are allowed"


def test_unknown_language_and_key_are_rejected() -> None:
    with pytest.raises(ValueError):
        load_messages("xx")
    with pytest.raises(ValueError):
        load_messages("en", overrides={"noSuchKey": "x"})


def test_message_table_is_read_only() -> None:
    messages = load_messages()

    with pytest.raises(TypeError):
        messages[MessageKey.LABEL_QUERY] = "Changed"  # type: ignore[index]
    assert "en" in available_languages()
