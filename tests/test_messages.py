"""Tests for chat message assembly."""

import pytest

from promptline.cache import MemoryCache
from promptline.core.messages import (
    build_messages_from_template,
    build_messages_with_metadata,
    count_messages_by_role,
    validate_messages,
)
from promptline.templating import TemplateRenderer
from promptline.types import InputTypeError

CHAT_TEMPLATE = """
<SYSTEM>You are a helpful assistant specialized in {{ expertise }}.</SYSTEM>
<USER>Help me with {{ task }}</USER>
<ASSISTANT>I'll help you with {{ task }}. Let me explain...</ASSISTANT>
<USER>{{ followUp ? `Can you give an example of {{ task }}?` : `Thanks!` }}</USER>
"""


class TestBuildMessagesFromTemplate:
    """Tests for build_messages_from_template."""

    def test_renders_then_splits(self) -> None:
        messages = build_messages_from_template(
            CHAT_TEMPLATE,
            {"expertise": "TypeScript", "task": "generics", "followUp": True},
        )
        assert messages == [
            {"role": "system", "content": "You are a helpful assistant specialized in TypeScript."},
            {"role": "user", "content": "Help me with generics"},
            {"role": "assistant", "content": "I'll help you with generics. Let me explain..."},
            {"role": "user", "content": "Can you give an example of generics?"},
        ]

    def test_false_branch(self) -> None:
        messages = build_messages_from_template(
            CHAT_TEMPLATE, {"expertise": "Go", "task": "channels"}
        )
        assert messages[-1] == {"role": "user", "content": "Thanks!"}

    def test_without_variables_placeholders_are_kept(self) -> None:
        messages = build_messages_from_template("<USER>Hi {{ name }}</USER>")
        assert messages == [{"role": "user", "content": "Hi {{ name }}"}]

    def test_rendered_role_tags_are_parsed(self) -> None:
        template = "{{ withSystem ? `<SYSTEM>Be terse.</SYSTEM>` }}<USER>{{ q }}</USER>"
        messages = build_messages_from_template(template, {"withSystem": True, "q": "Why?"})
        assert [msg["role"] for msg in messages] == ["system", "user"]

    def test_uses_given_renderer(self) -> None:
        cache: MemoryCache = MemoryCache(max_size=2)
        renderer = TemplateRenderer(cache=cache)
        build_messages_from_template("<USER>{{ q }}</USER>", {"q": "a"}, renderer=renderer)
        build_messages_from_template("<USER>{{ q }}</USER>", {"q": "b"}, renderer=renderer)
        assert cache.hits == 1

    def test_untagged_template_becomes_user_message(self) -> None:
        messages = build_messages_from_template("Summarize {{ doc }}", {"doc": "this"})
        assert messages == [{"role": "user", "content": "Summarize this"}]

    def test_non_string_template_raises(self) -> None:
        with pytest.raises(InputTypeError):
            build_messages_from_template(None, {})  # type: ignore[arg-type]

    def test_meta_block_is_not_a_message(self) -> None:
        template = '<META>{"settings": {}}</META><USER>Hi</USER>'
        assert build_messages_from_template(template) == [{"role": "user", "content": "Hi"}]


class TestBuildMessagesWithMetadata:
    """Tests for build_messages_with_metadata."""

    def test_returns_settings_and_rendered_messages(self) -> None:
        template = """<META>
{"settings": {"temperature": 0.7, "maxTokens": 2000}}
</META>
<SYSTEM>You are a creative writer.</SYSTEM>
<USER>Write a story about {{topic}}</USER>"""

        messages, metadata = build_messages_with_metadata(
            template, {"topic": "a robot discovering music"}
        )

        assert messages == [
            {"role": "system", "content": "You are a creative writer."},
            {"role": "user", "content": "Write a story about a robot discovering music"},
        ]
        assert metadata == {"settings": {"temperature": 0.7, "maxTokens": 2000}}

    def test_placeholders_in_meta_are_not_rendered(self) -> None:
        template = '<META>{"note": "{{ topic }}"}</META><USER>{{ topic }}</USER>'
        messages, metadata = build_messages_with_metadata(template, {"topic": "jazz"})

        assert messages == [{"role": "user", "content": "jazz"}]
        assert metadata == {"note": "{{ topic }}"}

    def test_without_meta_block(self) -> None:
        messages, metadata = build_messages_with_metadata("<USER>Simple message</USER>")
        assert messages == [{"role": "user", "content": "Simple message"}]
        assert metadata == {}

    def test_invalid_meta_json(self) -> None:
        messages, metadata = build_messages_with_metadata("<META>{oops</META>\n<USER>Test</USER>")
        assert messages == [{"role": "user", "content": "Test"}]
        assert metadata == {}


class TestValidateMessages:
    """Tests for validate_messages."""

    def test_valid_messages(self) -> None:
        messages = [
            {"role": "system", "content": "Be helpful."},
            {"role": "user", "content": "Hello!"},
        ]
        assert validate_messages(messages) == []

    def test_invalid_role(self) -> None:
        errors = validate_messages([{"role": "tool", "content": "x"}])
        assert len(errors) == 1
        assert "invalid role" in errors[0]

    def test_blank_content(self) -> None:
        errors = validate_messages([{"role": "user", "content": "  "}])
        assert errors == ["Message 0: content must be a non-empty string"]

    def test_non_dict_message(self) -> None:
        errors = validate_messages(["hello"])  # type: ignore[list-item]
        assert "must be a dict" in errors[0]


class TestCountMessagesByRole:
    """Tests for count_messages_by_role."""

    def test_counts(self) -> None:
        messages = build_messages_from_template(
            CHAT_TEMPLATE, {"expertise": "x", "task": "y"}
        )
        assert count_messages_by_role(messages) == {"system": 1, "user": 2, "assistant": 1}
