"""Aggregate lookups that report a miss as ``NotFound``."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.errors import NotFound


def load(aggregate_cls, identifier, label: str | None = None):
    label = label or aggregate_cls.__name__
    if not identifier:
        raise NotFound(f"{label} not found")
    try:
        return current_domain.repository_for(aggregate_cls).get(str(identifier))
    except ObjectNotFoundError as exc:
        raise NotFound(f"{label} {identifier} not found", identifier=str(identifier)) from exc
