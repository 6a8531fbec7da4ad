"""Path and JSON pointer utilities for reference resolution."""

from functools import reduce
from pathlib import Path
from typing import Any

from mockserver_refutil.exceptions import UnresolvableDocumentError, UnresolvablePointerError


class PathValidator:
    """Validates document paths and navigates JSON pointers."""

    @staticmethod
    def validate_document_path(document_path: Path, root_path: Path | None) -> Path:
        """Ensure a canonical document path stays inside the allowed directory tree.

        Args:
            document_path: Absolute, normalised document path taken from a canonical identity
            root_path: The root path that documents should not escape, or None for no restriction

        Returns:
            The document path unchanged

        Raises:
            UnresolvableDocumentError: If the path lies outside root_path
        """
        if root_path is None:
            return document_path

        try:
            document_path.relative_to(root_path)
        except ValueError:
            raise UnresolvableDocumentError(f"Document '{document_path}' points outside allowed directory tree") from None

        return document_path

    @staticmethod
    def parse_json_pointer(pointer: str) -> list[str]:
        """Parse a JSON pointer into path components.

        Args:
            pointer: JSON pointer string (e.g., "/definitions/Pet")

        Returns:
            List of path components

        Raises:
            UnresolvablePointerError: If the pointer is invalid
        """
        if not pointer:
            return []

        if not pointer.startswith("/"):
            raise UnresolvablePointerError(f"Invalid JSON pointer: {pointer} (must start with '/')")

        # ~1 before ~0, so "~01" becomes "~1"
        return [part.replace("~1", "/").replace("~0", "~") for part in pointer[1:].split("/")]

    @classmethod
    def navigate_pointer(cls, data: Any, pointer: str) -> Any:
        """Return the value addressed by pointer inside data.

        Raises:
            UnresolvablePointerError: If the pointer does not address a value
        """
        parts = cls.parse_json_pointer(pointer)

        try:
            return reduce(cls._step, parts, data)
        except (KeyError, IndexError, ValueError, TypeError) as e:
            raise UnresolvablePointerError(f"Invalid JSON pointer {pointer}: {e}") from e

    @staticmethod
    def _step(obj: Any, key: str) -> Any:
        if isinstance(obj, list):
            return obj[int(key)]
        try:
            return obj[key]
        except KeyError:
            # YAML parses unquoted keys such as response codes as integers
            if key.isdigit():
                return obj[int(key)]
            raise
