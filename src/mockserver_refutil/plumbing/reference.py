"""Canonical identities for $ref values."""

import os
import re
from pathlib import Path

from mockserver_refutil.exceptions import MalformedReferenceError

# Regex pattern for parsing $ref values
REF_PATTERN = re.compile(r"^(?P<file>[^#]+)?(?:#(?P<pointer>.*))?$")

# Remote documents are never fetched
REMOTE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def split_reference(ref: str) -> tuple[str | None, str]:
    """Split a $ref value into its document and pointer components.

    Args:
        ref: The reference string, e.g. "#/definitions/Pet" or "common.yaml#/responses/NotFound"

    Returns:
        Tuple of (document component or None for fragment-only references, pointer)

    Raises:
        MalformedReferenceError: If the reference cannot be parsed
    """
    match = REF_PATTERN.match(ref)
    if not ref or not match:
        raise MalformedReferenceError(f"Invalid $ref format: {ref!r}")

    file_path = match.group("file")
    pointer = match.group("pointer") or ""

    if pointer and not pointer.startswith("/"):
        raise MalformedReferenceError(f"Invalid $ref format: {ref!r} (pointer must start with '/')")

    if file_path and REMOTE_PATTERN.match(file_path):
        raise MalformedReferenceError(f"Remote reference {ref!r} is not supported")

    return file_path, pointer


def canonicalize(base_path: str | os.PathLike[str], ref: str) -> str:
    """Turn a $ref found in the document at base_path into a canonical identity.

    The identity is the absolute, syntactically normalised document path followed by
    "#" and the pointer, so relative and absolute spellings of the same target compare
    equal. The filesystem is never touched.
    """
    file_path, pointer = split_reference(ref)

    if file_path is None:
        document = Path(base_path)
    else:
        document = Path(file_path)
        if not document.is_absolute():
            document = Path(base_path).parent / document

    return f"{os.path.normpath(os.path.abspath(document))}#{pointer}"


def split_identity(identity: str) -> tuple[Path, str]:
    """Split a canonical identity back into (document path, pointer)."""
    document, separator, pointer = identity.partition("#")
    if not separator or not document:
        raise MalformedReferenceError(f"Invalid canonical identity: {identity!r}")
    return Path(document), pointer
