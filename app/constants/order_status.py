from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Only consulted when settings.enforce_status_transitions is on
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: [OrderStatus.COMPLETED, OrderStatus.CANCELLED],
    OrderStatus.COMPLETED: [],
    OrderStatus.CANCELLED: [],
}

# Statuses from which an order can no longer be cancelled
NON_CANCELLABLE_STATUSES = [OrderStatus.COMPLETED, OrderStatus.CANCELLED]
