"""Small helpers shared by the migration machinery."""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit


class MultiError(Exception):
    """An error that holds several errors at once."""

    def __init__(self, *args: BaseException | None) -> None:
        self.errors: list[BaseException] = [e for e in args if e is not None]
        super().__init__(*self.errors)

    def __str__(self) -> str:
        return " and ".join(text for text in map(str, self.errors) if text)


def suint(n: int) -> int:
    """Return ``n`` as an unsigned integer, refusing negative input."""
    if n < 0:
        raise ValueError(f"suint({n}) expects input >= 0")
    return n


def filter_custom_query(url: str) -> str:
    """Return ``url`` without the query values whose keys start with ``x-``."""
    parts = urlsplit(url)
    values = parse_qs(parts.query, keep_blank_values=True)
    kept = sorted(
        (key, vals)
        for key, vals in values.items()
        if len(key) <= 1 or not key.startswith("x-")
    )
    query = urlencode(kept, doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))