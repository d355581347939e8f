
import pytest
from customer_orders import create_app, db
from customer_orders.schema import define_schema
from customer_orders.seed import seed


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path}/test.db",  # use sqlite for tests
    })
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture()
def schema(app):
    define_schema()
    return app


@pytest.fixture()
def seeded(schema):
    return seed()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()
