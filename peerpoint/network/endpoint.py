"""
PeerPoint - Endpoint Model

Defines the Endpoint base class and the family table that maps a
family tag (the text before the first ':' of a descriptor) to the
Endpoint variant that understands its payload.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, List, Optional, Type

logger = logging.getLogger(__name__)

_FAMILIES: Dict[str, Type["Endpoint"]] = {}


class EndpointDescriptor(ABC):
    """
    Syntactically valid descriptor that has not been resolved yet.

    Splitting a descriptor never blocks; turning it into an Endpoint may
    need a name lookup, so that step is explicit. Use resolve() on worker
    threads and resolve_async() inside an event loop.
    """

    family: ClassVar[str] = ""

    @abstractmethod
    def resolve(self) -> "Endpoint":
        """Resolve into an Endpoint, blocking on name lookup if needed."""

    @abstractmethod
    async def resolve_async(self) -> "Endpoint":
        """Resolve into an Endpoint without blocking the event loop."""


class Endpoint(ABC):
    """
    Addressable destination in the network.

    Every variant carries a class-level family tag and knows how to
    encode its payload as text and decode it back.

    Example:
        endpoint = parse_endpoint("inet:10.0.0.5/4000")
        str(endpoint)  # "inet:10.0.0.5/4000"
    """

    family: ClassVar[str] = ""

    @classmethod
    @abstractmethod
    def from_payload(cls, payload: str) -> EndpointDescriptor:
        """Decode the family-specific part of a descriptor."""

    @abstractmethod
    def payload(self) -> str:
        """Encode the family-specific part of a descriptor."""

    def to_descriptor(self) -> str:
        """Get the textual descriptor for this endpoint."""
        return f"{self.family}:{self.payload()}"

    def __str__(self) -> str:
        return self.to_descriptor()


def register_family(cls: Type[Endpoint]) -> Type[Endpoint]:
    """
    Register an Endpoint variant under its family tag.

    Usable as a class decorator.

    Raises:
        ValueError: If the tag is empty or already taken by another class
    """
    tag = cls.family
    if not tag or ":" in tag:
        raise ValueError(f"Invalid endpoint family tag: {tag!r}")

    existing = _FAMILIES.get(tag)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Endpoint family {tag!r} already registered to {existing.__name__}"
        )

    _FAMILIES[tag] = cls
    logger.debug(f"Registered endpoint family {tag!r} -> {cls.__name__}")
    return cls


def get_family(tag: str) -> Optional[Type[Endpoint]]:
    """Get the Endpoint variant for a family tag, or None."""
    return _FAMILIES.get(tag)


def registered_families() -> List[str]:
    """Get all registered family tags."""
    return list(_FAMILIES)
