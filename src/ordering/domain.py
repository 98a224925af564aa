"""Ordering bounded context: catalogue, cart, checkout, orders and payment slips.

Everything that must change together at checkout (cart lines, product stock,
the new order) lives in this one domain so that a single unit of work can
commit or roll it back as a whole.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
