"""Template registry for managing named prompt templates."""

import hashlib
from pathlib import Path

from ..types import TemplateError, Variables, require_str
from .engine import TemplateRenderer

DEFAULT_EXTENSIONS = (".tpl", ".txt", ".md", ".prompt")


class TemplateRegistry:
    """
    Registry for managing prompt templates.

    Supports:
    - Loading templates from files
    - Registering templates by name
    - Namespaced template names (e.g., 'prompts.system.default')
    - Template versioning via content hashing
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self._sources: dict[str, str] = {}  # name -> template source
        self._hashes: dict[str, str] = {}  # name -> content hash

    def register(self, name: str, source: str) -> None:
        """
        Register a template by name.

        Args:
            name: Template name (can use dots for namespacing)
            source: Template source string
        """
        require_str("template", source)
        self._sources[name] = source
        self._hashes[name] = self._compute_hash(source)

    def get_source(self, name: str) -> str:
        """
        Get the source of a template.

        Raises:
            TemplateError: If template not found
        """
        if name not in self._sources:
            raise TemplateError(f"Template not found: {name}")
        return self._sources[name]

    def render(self, name: str, variables: Variables | None = None) -> str:
        """
        Render a template by name.

        Args:
            name: Template name
            variables: Variables to pass to template

        Returns:
            Rendered template string
        """
        return self.renderer.render(self.get_source(name), variables)

    def has(self, name: str) -> bool:
        """Check if a template exists."""
        return name in self._sources

    def list_templates(self, prefix: str | None = None) -> list[str]:
        """
        List registered template names.

        Args:
            prefix: Optional prefix to filter by (e.g., 'prompts.')

        Returns:
            List of template names
        """
        names = list(self._sources.keys())
        if prefix:
            names = [n for n in names if n.startswith(prefix)]
        return sorted(names)

    def get_hash(self, name: str) -> str:
        """
        Get the content hash of a template.

        Useful for reproducibility tracking.
        """
        if name not in self._hashes:
            raise TemplateError(f"Template not found: {name}")
        return self._hashes[name]

    def _compute_hash(self, source: str) -> str:
        """Compute SHA256 hash of template source."""
        return hashlib.sha256(source.encode()).hexdigest()[:16]

    def load_from_directory(
        self,
        directory: Path | str,
        prefix: str = "",
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ) -> int:
        """
        Load all templates from a directory.

        Template names are derived from file paths:
        - 'prompts/system/default.tpl' -> 'system.default'
        - With prefix='prompts': 'prompts.system.default'

        Args:
            directory: Directory to load from
            prefix: Prefix to add to template names
            extensions: File extensions to load

        Returns:
            Number of templates loaded
        """
        directory = Path(directory)
        if not directory.exists():
            raise TemplateError(f"Template directory not found: {directory}")

        count = 0
        for file_path in sorted(directory.rglob("*")):
            if file_path.is_file() and file_path.suffix in extensions:
                relative = file_path.relative_to(directory)
                name_parts = list(relative.parts)
                name_parts[-1] = relative.stem
                name = ".".join(name_parts)

                if prefix:
                    name = f"{prefix}.{name}"

                self.register(name, file_path.read_text(encoding="utf-8"))
                count += 1

        return count

    def clear(self) -> None:
        """Remove all registered templates."""
        self._sources.clear()
        self._hashes.clear()
