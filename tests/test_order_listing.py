import pytest

from app.constants.order_status import OrderStatus
from app.schemas.order_schemas import OrderSort
from app.services import order_service
from app.utils.pagination import clamp_limit, clamp_page
from conftest import checkout_payload


@pytest.fixture
def orders(session, user, other_user, address, other_address, variant):
    """Three orders for ``user`` (totals 20, 60, 40) and one for ``other_user``."""
    placed = [
        order_service.create_order(session, user.id, checkout_payload(address, [(variant, q)]))
        for q in (1, 3, 2)
    ]
    order_service.create_order(session, other_user.id, checkout_payload(other_address, [(variant, 1)]))
    order_service.cancel_order(session, placed[0].id, user)
    return placed


def test_user_listing_only_returns_own_orders(session, user, orders):
    result = order_service.list_user_orders(session, user.id)

    assert result["meta"] == {"page": 1, "limit": 20, "total": 3, "total_pages": 1}
    assert {o.user_id for o in result["data"]} == {user.id}


def test_listing_sorted_by_total(session, user, orders):
    result = order_service.list_user_orders(session, user.id, sort=OrderSort.total_amount_asc)
    assert [o.total_amount for o in result["data"]] == [20, 40, 60]

    result = order_service.list_user_orders(session, user.id, sort="total_amount:desc")
    assert [o.total_amount for o in result["data"]] == [60, 40, 20]


def test_listing_defaults_to_newest_first(session, user, orders):
    result = order_service.list_user_orders(session, user.id)
    assert [o.id for o in result["data"]] == [o.id for o in reversed(orders)]


def test_listing_rejects_unknown_sort_key(session, user, orders):
    with pytest.raises(ValueError):
        order_service.list_user_orders(session, user.id, sort="email:asc")


def test_listing_filters_by_status(session, user, orders):
    result = order_service.list_user_orders(session, user.id, status=OrderStatus.CANCELLED)

    assert result["meta"]["total"] == 1
    assert result["data"][0].id == orders[0].id


def test_listing_paginates(session, user, orders):
    result = order_service.list_user_orders(session, user.id, page=2, limit=2)

    assert result["meta"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
    assert len(result["data"]) == 1


def test_admin_listing_sees_everyone_and_filters_by_user(session, user, other_user, orders):
    everyone = order_service.list_all_orders(session)
    assert everyone["meta"]["total"] == 4

    theirs = order_service.list_all_orders(session, user_id=other_user.id)
    assert theirs["meta"]["total"] == 1
    assert theirs["data"][0].user_id == other_user.id

    pending_mine = order_service.list_all_orders(session, user_id=user.id, status=OrderStatus.PENDING)
    assert pending_mine["meta"]["total"] == 2


def test_get_order_hides_other_users_orders(session, user, other_user, admin, orders):
    order_id = orders[1].id

    assert order_service.get_order(session, order_id, other_user) is None
    assert order_service.get_order(session, order_id, user).id == order_id

    detail = order_service.get_order(session, order_id, admin)
    assert detail.items[0].quantity == 3
    assert detail.status_history[0].status == OrderStatus.PENDING


@pytest.mark.parametrize("given, expected", [(None, 20), (0, 1), (-5, 1), (50, 50), (500, 100)])
def test_limit_is_clamped(given, expected):
    assert clamp_limit(given) == expected


@pytest.mark.parametrize("given, expected", [(None, 1), (0, 1), (-1, 1), (3, 3)])
def test_page_is_clamped(given, expected):
    assert clamp_page(given) == expected
