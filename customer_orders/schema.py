"""Table and view DDL. Customers are created first and dropped last."""

import logging

from sqlalchemy import inspect, text

from . import db
from .errors import SchemaOrderError
from .models import Customer, Order
from .queries import VIEWS

logger = logging.getLogger(__name__)

# Creation order; drops run in reverse.
TABLES = (Customer.__table__, Order.__table__)


def _engine(engine):
    return engine if engine is not None else db.engine


def create_table(table, engine=None):
    """Create ``table``, refusing when a table it references is missing."""
    engine = _engine(engine)
    with engine.begin() as conn:
        inspector = inspect(conn)
        referenced = {fk.column.table.name for fk in table.foreign_keys}
        missing = {
            name for name in referenced
            if name != table.name and not inspector.has_table(name)
        }
        if missing:
            raise SchemaOrderError(table.name, missing)
        table.create(conn)
    logger.info("Created table %s", table.name)


def create_views(engine=None):
    engine = _engine(engine)
    with engine.begin() as conn:
        for view in VIEWS.values():
            definition = view.select().compile(
                dialect=conn.dialect, compile_kwargs={"literal_binds": True}
            )
            conn.execute(text(f"CREATE VIEW {view.name} AS {definition}"))
            logger.info("Created view %s", view.name)


def drop_views(engine=None):
    engine = _engine(engine)
    with engine.begin() as conn:
        for name in reversed(list(VIEWS)):
            conn.execute(text(f"DROP VIEW IF EXISTS {name}"))


def drop_schema(engine=None):
    engine = _engine(engine)
    drop_views(engine)
    with engine.begin() as conn:
        for table in reversed(TABLES):
            table.drop(conn, checkfirst=True)
    logger.info("Dropped views and tables")


def define_schema(engine=None):
    """Drop and recreate both tables and the views. Existing rows are discarded."""
    engine = _engine(engine)
    # Release any connection the session still holds before running DDL.
    db.session.remove()
    drop_schema(engine)
    for table in TABLES:
        create_table(table, engine)
    create_views(engine)
