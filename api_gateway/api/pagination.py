# This file handles search and pagination parsing for list endpoints.
# It exists so every entity router applies the same defaults and rejects bad input before any RPC call.
# Page and limit must be unsigned 64-bit integers because that is how the backend messages carry them.

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
_UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class ListParams:
    search: str
    page: int
    limit: int

    def as_request_fields(self) -> dict[str, object]:
        return {"search": self.search, "page": self.page, "limit": self.limit}


def parse_unsigned(raw: str, *, name: str) -> int:
    """Parse a base-10 unsigned integer that fits in 64 bits."""

    if not raw.isascii() or not raw.isdigit():
        raise ValueError(f"{name} must be a non-negative integer, got {raw!r}")
    value = int(raw)
    if value > _UINT64_MAX:
        raise ValueError(f"{name} is out of range: {raw!r}")
    return value


def parse_list_params(
    *,
    search: str | None,
    page: str | None,
    limit: str | None,
) -> ListParams:
    """Apply list defaults and validate raw query values.

    Only an absent parameter falls back to its default; an empty value such as
    `?page=` is rejected like any other unparsable input.
    """

    resolved_page = DEFAULT_PAGE if page is None else parse_unsigned(page, name="page")
    resolved_limit = DEFAULT_LIMIT if limit is None else parse_unsigned(limit, name="limit")
    return ListParams(search=search or "", page=resolved_page, limit=resolved_limit)
