"""Document addresses and safe value lookup."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Union

DocumentValue = Union[None, str, int, float, bool, Mapping[str, Any], list[Any]]
PathSegment = Union[str, int]
PathAddress = tuple[PathSegment, ...]


class _Absent(Enum):
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent.ABSENT


def is_index(segment: object) -> bool:
    """Return True when ``segment`` addresses an array element."""
    return isinstance(segment, int) and not isinstance(segment, bool)


def get_value(document: Any, address: Sequence[PathSegment]) -> Any:
    """Return the value stored at ``address``, or ``ABSENT`` when any segment is missing."""
    current = document
    for segment in address:
        if is_index(segment):
            if not isinstance(current, list) or not 0 <= int(segment) < len(current):
                return ABSENT
            current = current[int(segment)]
        elif isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            return ABSENT
    return current


def parse_address(text: str) -> PathAddress:
    """Parse a dotted address such as ``items.0.rating``.

    All-digit segments are array indices. An empty string is the root address.
    """
    stripped = text.strip()
    if not stripped:
        return ()
    segments: list[PathSegment] = []
    for raw_segment in stripped.split("."):
        if not raw_segment:
            raise ValueError(f"Address contains an empty segment: {text!r}")
        if raw_segment.isascii() and raw_segment.isdigit():
            segments.append(int(raw_segment))
        else:
            segments.append(raw_segment)
    return tuple(segments)


def format_address(address: Sequence[PathSegment]) -> str:
    """Render ``address`` in dotted form."""
    return ".".join(str(segment) for segment in address)
