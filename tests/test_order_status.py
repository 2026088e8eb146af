import pytest
from sqlmodel import select

from app.config import settings
from app.constants.order_status import OrderStatus
from app.exceptions import InsufficientStock, InvalidStatusTransition, OrderNotFound
from app.models import Order, OrderStatusHistory, ProductVariant
from app.services import order_service
from conftest import checkout_payload


@pytest.fixture
def order(session, user, address, variant):
    return order_service.create_order(session, user.id, checkout_payload(address, [(variant, 1)]))


def test_status_update_appends_history_with_default_note(session, order):
    updated = order_service.update_order_status(session, order.id, OrderStatus.COMPLETED)

    assert updated.status == OrderStatus.COMPLETED
    # newest first on the detail view
    assert [(h.status, h.note) for h in updated.status_history] == [
        (OrderStatus.COMPLETED, "Status changed to COMPLETED"),
        (OrderStatus.PENDING, "Order created"),
    ]


def test_status_update_keeps_custom_note(session, order):
    updated = order_service.update_order_status(
        session, order.id, OrderStatus.COMPLETED, "Delivered to front desk"
    )

    assert updated.status_history[0].note == "Delivered to front desk"


def test_any_transition_is_allowed_by_default(session, order):
    order_service.update_order_status(session, order.id, OrderStatus.COMPLETED)
    reopened = order_service.update_order_status(session, order.id, OrderStatus.PENDING)

    assert reopened.status == OrderStatus.PENDING
    assert len(reopened.status_history) == 3


def test_terminal_statuses_are_enforced_when_configured(session, order, monkeypatch):
    monkeypatch.setattr(settings, "enforce_status_transitions", True)

    order_service.update_order_status(session, order.id, OrderStatus.COMPLETED)

    with pytest.raises(InvalidStatusTransition):
        order_service.update_order_status(session, order.id, OrderStatus.PENDING)

    session.expire_all()
    assert session.get(Order, order.id).status == OrderStatus.COMPLETED
    history = session.exec(
        select(OrderStatusHistory).where(OrderStatusHistory.order_id == order.id)
    ).all()
    assert len(history) == 2


def test_status_update_on_missing_order(session):
    with pytest.raises(OrderNotFound):
        order_service.update_order_status(session, 12345, OrderStatus.COMPLETED)


def test_soft_delete_hides_order_but_keeps_rows(session, user, admin, variant, order):
    order_service.delete_order(session, order.id)

    assert order_service.get_order(session, order.id, admin) is None
    assert order_service.list_user_orders(session, user.id)["meta"]["total"] == 0
    assert order_service.list_all_orders(session)["meta"]["total"] == 0

    session.expire_all()
    row = session.get(Order, order.id)
    assert row.is_deleted is True
    assert row.deleted_at is not None
    # stock and status are untouched
    assert row.status == OrderStatus.PENDING
    assert session.get(type(variant), variant.id).stock == 9


def test_soft_delete_twice_is_not_found(session, order):
    order_service.delete_order(session, order.id)

    with pytest.raises(OrderNotFound):
        order_service.delete_order(session, order.id)


def _stock(session, variant_id):
    session.expire_all()
    return session.get(ProductVariant, variant_id).stock


def test_reopening_a_cancelled_order_reserves_stock_again(session, user, address, variant):
    order = order_service.create_order(session, user.id, checkout_payload(address, [(variant, 3)]))
    order_service.cancel_order(session, order.id, user)
    assert _stock(session, variant.id) == 10

    reopened = order_service.update_order_status(session, order.id, OrderStatus.PENDING)
    assert reopened.status == OrderStatus.PENDING
    assert _stock(session, variant.id) == 7

    order_service.cancel_order(session, order.id, user)
    assert _stock(session, variant.id) == 10


def test_admin_cancel_through_status_update_restocks(session, variant, order):
    assert _stock(session, variant.id) == 9

    order_service.update_order_status(session, order.id, OrderStatus.CANCELLED)
    assert _stock(session, variant.id) == 10

    # setting CANCELLED again is only a history entry
    again = order_service.update_order_status(session, order.id, OrderStatus.CANCELLED)
    assert len(again.status_history) == 3
    assert _stock(session, variant.id) == 10

    order_service.update_order_status(session, order.id, OrderStatus.COMPLETED)
    assert _stock(session, variant.id) == 9


def test_reopen_without_stock_is_refused_and_rolled_back(session, user, address, variant, order):
    order_service.update_order_status(session, order.id, OrderStatus.CANCELLED)
    order_service.create_order(session, user.id, checkout_payload(address, [(variant, 10)]))
    assert _stock(session, variant.id) == 0

    with pytest.raises(InsufficientStock):
        order_service.update_order_status(session, order.id, OrderStatus.PENDING)

    session.expire_all()
    assert session.get(Order, order.id).status == OrderStatus.CANCELLED
    assert _stock(session, variant.id) == 0
    history = session.exec(
        select(OrderStatusHistory).where(OrderStatusHistory.order_id == order.id)
    ).all()
    assert len(history) == 2
