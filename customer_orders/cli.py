
import click
from flask import current_app
from flask.cli import with_appcontext

from .errors import OrderRejected
from .queries import CATALOG, run
from .schema import define_schema
from .seed import seed


def _format_row(row):
    return "\t".join(f"{key}={'' if value is None else value}" for key, value in row.items())


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Drop and recreate the tables and views."""
    define_schema()
    click.echo("Schema defined.")


@click.command("seed-db")
@with_appcontext
@click.option("--atomic/--per-row", default=None,
              help="Load orders as one transaction or one per row (default: ORDER_SEED_MODE).")
def seed_db_command(atomic):
    """Define the schema and load the sample rows."""
    if atomic is None:
        atomic = current_app.config["ORDER_SEED_MODE"] == "atomic"
    define_schema()
    try:
        result = seed(atomic=atomic)
    except OrderRejected as exc:
        raise click.ClickException(f"{exc}. No orders were committed.")
    for row in result.inserted:
        click.echo(f"inserted order {row['id']}")
    for row, reason in result.rejected:
        click.echo(f"rejected order {row['id']}: {reason}")


@click.command("query")
@with_appcontext
@click.argument("name", type=click.Choice(sorted(CATALOG)))
def query_command(name):
    """Run a catalog query or view and print its rows."""
    rows = run(name)
    for row in rows:
        click.echo(_format_row(row))
    click.echo(f"({len(rows)} rows)")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_db_command)
    app.cli.add_command(query_command)
