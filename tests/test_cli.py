
from sqlalchemy import func, inspect, select
from customer_orders import db
from customer_orders.models import Order


def test_init_db(runner, app):
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Schema defined.' in result.output
    assert inspect(db.engine).has_table('orders')


def test_seed_db_per_row(runner, app):
    result = runner.invoke(args=['seed-db', '--per-row'])
    assert result.exit_code == 0
    assert 'inserted order 3' in result.output
    assert 'rejected order 4' in result.output
    assert db.session.scalar(select(func.count()).select_from(Order)) == 3


def test_seed_db_atomic(runner, app):
    result = runner.invoke(args=['seed-db', '--atomic'])
    assert result.exit_code == 1
    assert 'No orders were committed' in result.output
    assert db.session.scalar(select(func.count()).select_from(Order)) == 0


def test_seed_db_uses_configured_mode(runner, app):
    app.config['ORDER_SEED_MODE'] = 'atomic'
    result = runner.invoke(args=['seed-db'])
    assert result.exit_code == 1


def test_query(runner, seeded):
    result = runner.invoke(args=['query', 'with-orders-exists'])
    assert result.exit_code == 0
    assert 'name=Alice' in result.output
    assert 'name=Bob' in result.output
    assert '(2 rows)' in result.output


def test_query_unknown_name(runner, seeded):
    result = runner.invoke(args=['query', 'cross-join'])
    assert result.exit_code == 2
