"""Read-only joins, subqueries and views over customers and orders."""

from collections import namedtuple
from decimal import Decimal

from sqlalchemy import Column, Integer, MetaData, Numeric, String, Table, Date
from sqlalchemy import func, select, text, union
from sqlalchemy.orm import aliased

from . import db
from .errors import UnknownQueryError
from .models import Customer, Order

ViewDefinition = namedtuple("ViewDefinition", ["name", "select", "table"])

views_metadata = MetaData()

customer_order_summary_view = Table(
    "customer_order_summary",
    views_metadata,
    Column("customer_id", Integer),
    Column("name", String(100)),
    Column("city", String(100)),
    Column("total_order_amount", Numeric(10, 2)),
)

public_customer_orders_view = Table(
    "public_customer_orders",
    views_metadata,
    Column("name", String(100)),
    Column("order_date", Date),
    Column("amount", Numeric(10, 2)),
)


def _rows(stmt):
    return [dict(row) for row in db.session.execute(stmt).mappings()]


def _order_total():
    # Correlates against the enclosing query's customers row.
    return (
        select(func.sum(Order.amount))
        .where(Order.customer_id == Customer.id)
        .scalar_subquery()
    )


def _joined_columns():
    return (
        Customer.id.label("customer_id"),
        Customer.name,
        Customer.city,
        Order.id.label("order_id"),
        Order.order_date,
        Order.amount,
    )


def _left_join_select():
    return (
        select(*_joined_columns())
        .select_from(Customer)
        .outerjoin(Order, Order.customer_id == Customer.id)
    )


def _right_join_select():
    # Same columns, roles swapped: orders drive the join.
    return (
        select(*_joined_columns())
        .select_from(Order)
        .outerjoin(Customer, Order.customer_id == Customer.id)
    )


# Joins

def inner_join():
    stmt = (
        select(*_joined_columns())
        .select_from(Customer)
        .join(Order, Order.customer_id == Customer.id)
        .order_by(Order.id)
    )
    return _rows(stmt)


def left_join():
    return _rows(_left_join_select().order_by(Customer.id, Order.id))


def right_join():
    return _rows(_right_join_select().order_by(Order.id))


def full_join():
    """Every customer and every order, matched where possible.

    Built as ``UNION`` of the left and right joins so it runs on engines
    without ``FULL OUTER JOIN``; ``UNION`` drops the matched rows both sides
    produce.
    """
    combined = union(_left_join_select(), _right_join_select()).subquery()
    stmt = select(combined).order_by(combined.c.customer_id, combined.c.order_id)
    return _rows(stmt)


# Subqueries

def customers_with_customer_count():
    other = aliased(Customer)
    customer_count = select(func.count(other.id)).scalar_subquery()
    stmt = select(
        Customer.id, Customer.name, Customer.city,
        customer_count.label("customer_count"),
    ).order_by(Customer.id)
    return _rows(stmt)


def customers_with_order_totals():
    """Each customer with the sum of their own orders, 0 when they have none."""
    stmt = select(
        Customer.id, Customer.name, Customer.city,
        func.coalesce(_order_total(), 0).label("total_order_amount"),
    ).order_by(Customer.id)
    return _rows(stmt)


def customers_with_orders_in():
    stmt = (
        select(Customer.id, Customer.name, Customer.city)
        .where(Customer.id.in_(select(Order.customer_id)))
        .order_by(Customer.id)
    )
    return _rows(stmt)


def customers_with_orders_exists():
    has_orders = select(Order.id).where(Order.customer_id == Customer.id).exists()
    stmt = (
        select(Customer.id, Customer.name, Customer.city)
        .where(has_orders)
        .order_by(Customer.id)
    )
    return _rows(stmt)


def customers_with_total(amount=Decimal("430")):
    stmt = (
        select(Customer.id, Customer.name, Customer.city)
        .where(func.round(_order_total(), 2, type_=Numeric(10, 2)) == amount)
        .order_by(Customer.id)
    )
    return _rows(stmt)


# Views

def customer_order_summary_select():
    return (
        select(
            Customer.id.label("customer_id"),
            Customer.name,
            Customer.city,
            func.coalesce(func.sum(Order.amount), 0).label("total_order_amount"),
        )
        .select_from(Customer)
        .outerjoin(Order, Order.customer_id == Customer.id)
        .group_by(Customer.id, Customer.name, Customer.city)
    )


def public_customer_orders_select():
    return (
        select(Customer.name, Order.order_date, Order.amount)
        .select_from(Customer)
        .join(Order, Order.customer_id == Customer.id)
    )


VIEWS = {
    view.name: view
    for view in (
        ViewDefinition("customer_order_summary", customer_order_summary_select,
                       customer_order_summary_view),
        ViewDefinition("public_customer_orders", public_customer_orders_select,
                       public_customer_orders_view),
    )
}


def customer_order_summary():
    view = customer_order_summary_view
    return _rows(select(view).order_by(view.c.customer_id))


def public_customer_orders():
    view = public_customer_orders_view
    return _rows(select(view).order_by(view.c.order_date, view.c.name))


def select_all_from_view(name):
    """Run ``SELECT * FROM <name>`` and return ``(column_names, rows)``.

    Values come back as the driver returns them, without column type
    processing.
    """
    if name not in VIEWS:
        raise UnknownQueryError(name, VIEWS)
    result = db.session.execute(text(f"SELECT * FROM {name}"))
    columns = list(result.keys())
    return columns, [dict(row) for row in result.mappings()]


CATALOG = {
    "inner-join": inner_join,
    "left-join": left_join,
    "right-join": right_join,
    "full-join": full_join,
    "customer-count": customers_with_customer_count,
    "order-totals": customers_with_order_totals,
    "with-orders-in": customers_with_orders_in,
    "with-orders-exists": customers_with_orders_exists,
    "total-430": customers_with_total,
    "customer-order-summary": customer_order_summary,
    "public-customer-orders": public_customer_orders,
}


def run(name):
    try:
        query = CATALOG[name]
    except KeyError:
        raise UnknownQueryError(name, CATALOG) from None
    return query()
