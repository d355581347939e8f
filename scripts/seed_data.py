
import logging
import sys

from customer_orders import create_app
from customer_orders.errors import OrderRejected
from customer_orders.schema import define_schema
from customer_orders.seed import seed

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    with app.app_context():
        define_schema()
        try:
            result = seed(atomic=app.config["ORDER_SEED_MODE"] == "atomic")
        except OrderRejected as exc:
            print(f"Seeded customers; {exc}")
            sys.exit(1)
        print(f"Seeded {len(result.inserted)} orders, rejected {len(result.rejected)}.")
