

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from . import db
from .errors import OrderRejected
from .models import Customer, Order

logger = logging.getLogger(__name__)

SAMPLE_CUSTOMERS = [
    dict(id=1, name="Alice", city="New York"),
    dict(id=2, name="Bob", city="Los Angeles"),
    dict(id=3, name="Charlie", city="Chicago"),
    dict(id=4, name="David", city="Houston"),
]

SAMPLE_ORDERS = [
    dict(id=1, customer_id=1, order_date=date(2024, 1, 15), amount=Decimal("250.00")),
    dict(id=2, customer_id=1, order_date=date(2024, 2, 20), amount=Decimal("180.00")),
    dict(id=3, customer_id=2, order_date=date(2024, 3, 5), amount=Decimal("320.50")),
    dict(id=4, customer_id=5, order_date=date(2024, 3, 18), amount=Decimal("99.99")),
]


@dataclass
class SeedResult:
    inserted: list = field(default_factory=list)
    # (order fields, reason) pairs
    rejected: list = field(default_factory=list)


def seed_customers(rows=None):
    rows = [dict(c) for c in (SAMPLE_CUSTOMERS if rows is None else rows)]
    db.session.add_all([Customer(**c) for c in rows])
    db.session.commit()
    logger.info("Seeded %d customers", len(rows))


def add_order(**fields):
    """Insert a single order in its own transaction."""
    order = Order(**fields)
    db.session.add(order)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise OrderRejected([fields], str(exc.orig)) from exc
    return order


def seed_orders(atomic=False, rows=None):
    rows = [dict(o) for o in (SAMPLE_ORDERS if rows is None else rows)]
    result = SeedResult()
    if atomic:
        db.session.add_all([Order(**o) for o in rows])
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            logger.warning("Order batch rejected, nothing committed: %s", exc.orig)
            raise OrderRejected(rows, str(exc.orig)) from exc
        result.inserted.extend(rows)
        return result

    for o in rows:
        try:
            add_order(**o)
        except OrderRejected as exc:
            logger.warning("Order %s rejected: %s", o["id"], exc.reason)
            result.rejected.append((o, exc.reason))
        else:
            result.inserted.append(o)
    logger.info("Seeded %d of %d orders", len(result.inserted), len(rows))
    return result


def seed(atomic=False):
    seed_customers()
    return seed_orders(atomic=atomic)
