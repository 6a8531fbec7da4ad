"""Document loading and pointer dereferencing."""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Protocol

import yaml

from mockserver_refutil.exceptions import UnresolvableDocumentError
from mockserver_refutil.plumbing.path import PathValidator
from mockserver_refutil.plumbing.reference import split_identity

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class Dereferencer(Protocol):
    def dereference(self, identity: str) -> tuple[Any, Path]:
        """Return the raw node addressed by a canonical identity and the path of the document owning it."""
        ...


class DocumentLoader:
    """Loads JSON/YAML API documents from disk and dereferences canonical identities.

    Parsed documents are cached by absolute path and never modified, so one loader can
    serve any number of concurrent resolution calls.
    """

    def __init__(self, root_path: Path | None = None, encoding: str = DEFAULT_ENCODING):
        self.root_path = Path(os.path.normpath(os.path.abspath(root_path))) if root_path is not None else None
        self.encoding = encoding
        self.path_validator = PathValidator()
        self._documents: dict[Path, Any] = {}
        self._lock = threading.Lock()

    def add_document(self, path: Path, data: Any) -> None:
        """Register an already parsed document under path."""
        document_path = Path(os.path.normpath(os.path.abspath(path)))
        with self._lock:
            self._documents[document_path] = data

    def load_document(self, path: Path) -> Any:
        """Return the parsed document at path, reading it on first use.

        Raises:
            UnresolvableDocumentError: If the document is outside root_path, missing or cannot be parsed
        """
        document_path = self.path_validator.validate_document_path(Path(os.path.normpath(os.path.abspath(path))), self.root_path)

        with self._lock:
            if document_path in self._documents:
                return self._documents[document_path]

        data = self._read(document_path)
        with self._lock:
            # first reader wins when two threads load the same document
            return self._documents.setdefault(document_path, data)

    def dereference(self, identity: str) -> tuple[Any, Path]:
        """Return (node, document path) for a canonical identity.

        Raises:
            MalformedReferenceError: If identity is not a canonical identity
            UnresolvableDocumentError: If the document cannot be loaded
            UnresolvablePointerError: If the pointer does not address a node
        """
        document_path, pointer = split_identity(identity)
        data = self.load_document(document_path)
        return self.path_validator.navigate_pointer(data, pointer), document_path

    def _read(self, path: Path) -> Any:
        if not path.is_file():
            raise UnresolvableDocumentError(f"Document not found: {path}")

        logger.debug(f"Loading document {path}")
        try:
            with open(path, encoding=self.encoding) as f:
                if path.suffix.lower() in YAML_SUFFIXES:
                    return yaml.safe_load(f)
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise UnresolvableDocumentError(f"Failed to load document {path}: {e}") from e
