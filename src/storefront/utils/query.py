"""Helpers for walking Protean query sets."""

from collections.abc import Iterator

PAGE_SIZE = 100


def iterate_all(query, page_size: int = PAGE_SIZE) -> Iterator:
    """Yield every record matched by ``query``, fetching one page at a time."""
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        yield from page.items
        if len(page.items) < page_size:
            return
        offset += page_size


def first_or_none(query):
    results = query.limit(1).all().items
    return results[0] if results else None
