"""Building blocks for reference resolution."""

from mockserver_refutil.plumbing.circular import CycleGuard
from mockserver_refutil.plumbing.path import PathValidator
from mockserver_refutil.plumbing.reference import canonicalize, split_identity, split_reference

__all__ = ["CycleGuard", "PathValidator", "canonicalize", "split_identity", "split_reference"]
