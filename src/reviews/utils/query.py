"""Repository read helpers."""

from datetime import UTC

from protean.utils.globals import current_domain

PAGE_SIZE = 100


def fetch_all(aggregate_cls, **filters):
    """Every record matching ``filters``, read page by page."""
    query = current_domain.repository_for(aggregate_cls)._dao.query
    if filters:
        query = query.filter(**filters)

    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(PAGE_SIZE).all()
        items.extend(page.items)
        offset += PAGE_SIZE
        if offset >= page.total:
            return items


def as_utc(value):
    """Treat naive datetimes coming back from the database as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
