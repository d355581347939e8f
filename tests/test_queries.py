
from datetime import date
from decimal import Decimal

import pytest
from customer_orders import queries
from customer_orders.errors import UnknownQueryError
from customer_orders.seed import add_order


def names(rows):
    return [r['name'] for r in rows]


def test_inner_join_matches_valid_orders(seeded):
    rows = queries.inner_join()
    assert len(rows) == 3
    assert [(r['name'], r['order_id'], r['amount']) for r in rows] == [
        ('Alice', 1, Decimal('250.00')),
        ('Alice', 2, Decimal('180.00')),
        ('Bob', 3, Decimal('320.50')),
    ]


def test_left_join_keeps_every_customer(seeded):
    rows = queries.left_join()
    assert {r['customer_id'] for r in rows} == {1, 2, 3, 4}
    # Alice has two orders
    assert len(rows) == 5
    david = [r for r in rows if r['name'] == 'David']
    assert len(david) == 1
    assert david[0]['order_id'] is None
    assert david[0]['order_date'] is None
    assert david[0]['amount'] is None


def test_right_join_keeps_every_order(seeded):
    rows = queries.right_join()
    assert [r['order_id'] for r in rows] == [1, 2, 3]
    assert all(r['customer_id'] is not None for r in rows)


def test_full_join_is_union_of_left_and_right(seeded):
    rows = queries.full_join()
    assert len(rows) == 5
    assert {r['customer_id'] for r in rows} == {1, 2, 3, 4}
    assert {r['order_id'] for r in rows if r['order_id'] is not None} == {1, 2, 3}
    assert rows == queries.left_join()


def test_scalar_subquery_repeats_customer_count(seeded):
    rows = queries.customers_with_customer_count()
    assert names(rows) == ['Alice', 'Bob', 'Charlie', 'David']
    assert {r['customer_count'] for r in rows} == {4}


def test_correlated_subquery_totals(seeded):
    totals = {r['name']: r['total_order_amount'] for r in queries.customers_with_order_totals()}
    assert totals == {
        'Alice': Decimal('430.00'),
        'Bob': Decimal('320.50'),
        'Charlie': Decimal('0'),
        'David': Decimal('0'),
    }


def test_membership_and_existence_agree(seeded):
    in_rows = queries.customers_with_orders_in()
    exists_rows = queries.customers_with_orders_exists()
    assert names(in_rows) == ['Alice', 'Bob']
    assert in_rows == exists_rows


def test_total_equal_to_threshold(seeded):
    assert names(queries.customers_with_total()) == ['Alice']
    assert names(queries.customers_with_total(Decimal('320.50'))) == ['Bob']
    assert queries.customers_with_total(Decimal('1')) == []


def test_queries_see_new_rows(seeded):
    add_order(id=5, customer_id=3, order_date=date(2024, 4, 1), amount=Decimal('10.00'))
    assert names(queries.customers_with_orders_exists()) == ['Alice', 'Bob', 'Charlie']
    assert len(queries.inner_join()) == 4


def test_run_by_name(seeded):
    assert queries.run('inner-join') == queries.inner_join()
    with pytest.raises(UnknownQueryError):
        queries.run('cross-join')


def test_total_threshold_with_cents(seeded):
    add_order(id=5, customer_id=3, order_date=date(2024, 4, 1), amount=Decimal('0.10'))
    add_order(id=6, customer_id=3, order_date=date(2024, 4, 2), amount=Decimal('0.20'))
    assert names(queries.customers_with_total(Decimal('0.30'))) == ['Charlie']
    charlie = [r for r in queries.customer_order_summary() if r['name'] == 'Charlie'][0]
    assert charlie['total_order_amount'] == Decimal('0.30')
