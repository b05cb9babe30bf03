"""
Basic Promptline Example
========================

This example demonstrates the core features of Promptline:
- Rendering templates with ternaries and nested placeholders
- Building chat messages from role-tagged templates
- Extracting tagged sections from a model response
- Splitting a leading <thinking> block from the answer
- Validating tagged sections with Pydantic

To run this example:
    python examples/basic_example.py
"""

from pydantic import BaseModel

from promptline import (
    PromptlineConfig,
    build_messages_from_template,
    extract_initial_tagged_content,
    parse_structured_content,
    validate_tagged_response,
)

# ============================================================================
# Templates
# ============================================================================

REVIEW_TEMPLATE = """
<SYSTEM>You are a senior {{ language }} reviewer.
{{ strict ? `Flag every style issue.` : `` }}
Answer with <analysis>, <plan> and <code> sections.</SYSTEM>
<USER>Review this snippet:
{{ snippet }}
{{ hasContext && !brief ? `Context: {{ context }}` }}</USER>
"""


class Review(BaseModel):
    """Sections expected in the reviewer's answer."""

    analysis: str
    plan: str
    code: str = ""


# A canned response standing in for a model call
RESPONSE = """
<thinking>The loop never closes the file handle.</thinking>

<analysis>The file opened in the loop is never closed.
<plan>Use a context manager.
<code>with open(path) as f:
    data = f.read()
"""


def main() -> None:
    config = PromptlineConfig.from_env()
    renderer = config.create_renderer()

    print("=" * 60)
    print("Rendered messages")
    print("=" * 60)
    messages = build_messages_from_template(
        REVIEW_TEMPLATE,
        {
            "language": "Python",
            "strict": False,
            "snippet": "for path in paths:\n    f = open(path)",
            "hasContext": True,
            "context": "Runs in a long-lived worker.",
        },
        renderer=renderer,
    )
    for message in messages:
        print(f"[{message['role']}]\n{message['content']}\n")

    print("=" * 60)
    print("Response processing")
    print("=" * 60)
    leading = extract_initial_tagged_content(RESPONSE, "thinking")
    print(f"Reasoning: {leading.extracted}")

    sections = parse_structured_content(leading.remaining, ["analysis", "plan", "code"])
    for tag, text in sections.items():
        print(f"<{tag}> {text}")

    review = validate_tagged_response(leading.remaining, Review)
    print(f"\nValidated plan: {review.plan}")


if __name__ == "__main__":
    main()
