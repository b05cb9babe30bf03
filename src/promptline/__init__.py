"""
Promptline - prompt templating and tagged-text extraction for LLM workflows.

Features:
- Placeholder templates with ternaries and simple boolean conditions
- Role-tagged templates split into chat messages, with optional <META>
  metadata
- Extraction of tagged sections from model responses, tolerant of
  unclosed tags
- Leading reasoning-block extraction (e.g. <thinking>)
- Token counting, smart previews and random few-shot variables
- Optional Pydantic validation of tagged responses
"""

from .cache import MemoryCache
from .config import PromptlineConfig, configure_logging, load_env_files
from .core import (
    TokenCounter,
    build_messages_from_template,
    build_messages_with_metadata,
    count_messages_by_role,
    count_tokens,
    estimate_tokens,
    extract_random_variables,
    get_smart_preview,
    validate_messages,
)
from .parsing import (
    extract_initial_tagged_content,
    parse_role_tags,
    parse_structured_content,
    parse_template_with_metadata,
)
from .structured import (
    StructuredOutputError,
    format_validation_error_for_retry,
    validate_tagged_response,
)
from .templating import (
    TemplateRegistry,
    TemplateRenderer,
    evaluate_condition,
    parse_template,
    render_template,
)
from .types import (
    ConfigError,
    InputTypeError,
    LeadingExtraction,
    Message,
    MessageDict,
    Messages,
    PromptlineError,
    RenderLimitError,
    Role,
    TemplateError,
    Variables,
)

__version__ = "0.1.0"

__all__ = [
    # Templating
    "render_template",
    "TemplateRenderer",
    "TemplateRegistry",
    "evaluate_condition",
    "parse_template",
    # Parsing
    "parse_role_tags",
    "parse_structured_content",
    "extract_initial_tagged_content",
    "parse_template_with_metadata",
    "LeadingExtraction",
    # Messages
    "build_messages_from_template",
    "build_messages_with_metadata",
    "validate_messages",
    "count_messages_by_role",
    "Message",
    "Messages",
    "MessageDict",
    "Role",
    "Variables",
    # Content
    "TokenCounter",
    "count_tokens",
    "estimate_tokens",
    "get_smart_preview",
    "extract_random_variables",
    # Structured outputs
    "validate_tagged_response",
    "format_validation_error_for_retry",
    "StructuredOutputError",
    # Configuration
    "PromptlineConfig",
    "configure_logging",
    "load_env_files",
    "MemoryCache",
    # Exceptions
    "PromptlineError",
    "InputTypeError",
    "TemplateError",
    "RenderLimitError",
    "ConfigError",
]
