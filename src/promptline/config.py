"""Configuration management and environment loading."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .cache import MemoryCache
from .core.content import DEFAULT_TOKEN_MODEL, TokenCounter
from .templating.engine import DEFAULT_MAX_DEPTH, TemplateRenderer
from .templating.registry import TemplateRegistry
from .types import ConfigError

ENV_PREFIX = "PROMPTLINE_"


def _env_int(name: str) -> int | None:
    """Read a non-negative integer setting."""
    value = os.getenv(ENV_PREFIX + name)
    if not value:
        return None
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: {value}")
    if number < 0:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: {value}")
    return number


@dataclass
class PromptlineConfig:
    """Main configuration for promptline."""

    # Nested branch re-renders allowed before RenderLimitError
    max_render_depth: int = DEFAULT_MAX_DEPTH

    # Longest accepted template in characters (None = unlimited)
    max_template_length: int | None = None

    # Parsed templates kept per renderer (0 disables caching)
    template_cache_size: int = 128

    # Tokenizer model for token counting
    token_model: str = DEFAULT_TOKEN_MODEL

    # Template directory
    template_dir: Path | str | None = None

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "PromptlineConfig":
        """Create config from environment variables."""
        config = cls()

        if (depth := _env_int("MAX_RENDER_DEPTH")) is not None:
            config.max_render_depth = depth

        if (length := _env_int("MAX_TEMPLATE_LENGTH")) is not None:
            config.max_template_length = length

        if (cache_size := _env_int("TEMPLATE_CACHE_SIZE")) is not None:
            config.template_cache_size = cache_size

        if model := os.getenv(ENV_PREFIX + "TOKEN_MODEL"):
            config.token_model = model

        if template_dir := os.getenv(ENV_PREFIX + "TEMPLATE_DIR"):
            config.template_dir = Path(template_dir)

        if log_level := os.getenv(ENV_PREFIX + "LOG_LEVEL"):
            config.log_level = log_level.upper()

        return config

    def create_renderer(self) -> TemplateRenderer:
        """Build a renderer with this config's limits and its own parse cache."""
        cache = MemoryCache(max_size=self.template_cache_size) if self.template_cache_size else None
        return TemplateRenderer(
            max_depth=self.max_render_depth,
            max_length=self.max_template_length,
            cache=cache,
        )

    def create_registry(self) -> TemplateRegistry:
        """Build a template registry, loading template_dir when it exists."""
        registry = TemplateRegistry(renderer=self.create_renderer())
        if self.template_dir and Path(self.template_dir).exists():
            registry.load_from_directory(self.template_dir)
        return registry

    def create_token_counter(self) -> TokenCounter:
        """Build a token counter for token_model."""
        return TokenCounter(default_model=self.token_model)


def configure_logging(config: PromptlineConfig) -> None:
    """Apply config.log_level to the promptline logger hierarchy."""
    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        raise ConfigError(f"Invalid log level: {config.log_level}")
    logging.getLogger("promptline").setLevel(level)


def load_env_files(
    env_file: str | Path | None = None,
    env_files: list[str | Path] | None = None,
) -> None:
    """
    Load environment variables from .env files.

    Args:
        env_file: Single env file to load
        env_files: Multiple env files to load (later files override earlier)
    """
    files_to_load: list[Path] = []

    if env_files:
        files_to_load.extend(Path(f) for f in env_files)
    elif env_file:
        files_to_load.append(Path(env_file))
    else:
        # Default: try to load .env from current directory
        default_env = Path(".env")
        if default_env.exists():
            files_to_load.append(default_env)

    for file_path in files_to_load:
        if file_path.exists():
            load_dotenv(file_path, override=True)
