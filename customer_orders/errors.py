
class CustomerOrdersError(Exception):
    """Base class for errors raised by this package."""


class SchemaOrderError(CustomerOrdersError):
    """A table was created before a table its foreign keys refer to."""

    def __init__(self, table, missing):
        self.table = table
        self.missing = sorted(missing)
        super().__init__(
            f"cannot create {table!r}: referenced table(s) {', '.join(self.missing)} do not exist yet"
        )


class OrderRejected(CustomerOrdersError):
    """The engine refused an order write on referential integrity.

    ``rows`` holds the order fields that were part of the rejected write; the
    underlying ``IntegrityError`` is chained as ``__cause__``.
    """

    def __init__(self, rows, reason):
        self.rows = list(rows)
        self.reason = reason
        super().__init__(f"order write rejected ({len(self.rows)} row(s)): {reason}")


class UnknownQueryError(CustomerOrdersError, KeyError):
    def __init__(self, name, known):
        self.name = name
        super().__init__(f"unknown query {name!r}; expected one of: {', '.join(sorted(known))}")

    def __str__(self):
        return self.args[0]
