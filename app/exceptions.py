"""
Errors raised by the order workflow.

Every error carries a stable ``code`` and a human readable ``message``; the
category base class decides the HTTP status the API answers with.
"""


class OrderServiceError(Exception):
    status_code = 400
    code = "ORDER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> dict:
        return {"success": False, "code": self.code, "message": self.message}


# ---------- categories ----------

class NotFoundError(OrderServiceError):
    status_code = 404
    code = "NOT_FOUND"


class OrderValidationError(OrderServiceError):
    status_code = 422
    code = "VALIDATION_ERROR"


class BusinessRuleError(OrderServiceError):
    status_code = 400
    code = "BUSINESS_RULE_VIOLATION"


class InternalError(OrderServiceError):
    status_code = 500
    code = "INTERNAL_ERROR"


# ---------- not found ----------

class AddressNotFound(NotFoundError):
    code = "ADDRESS_NOT_FOUND"

    def __init__(self, address_id: int):
        super().__init__(f"Address {address_id} not found or does not belong to user")


class ProductNotFound(NotFoundError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class VariantNotFound(NotFoundError):
    code = "VARIANT_NOT_FOUND"

    def __init__(self, variant_id: int):
        super().__init__(f"Product variant {variant_id} not found")
        self.variant_id = variant_id


class OrderNotFound(NotFoundError):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} not found")


# ---------- validation ----------

class EmptyOrder(OrderValidationError):
    code = "EMPTY_ORDER"

    def __init__(self):
        super().__init__("Order must contain at least one item")


class InvalidQuantity(OrderValidationError):
    code = "INVALID_QUANTITY"

    def __init__(self, variant_id: int, quantity: int):
        super().__init__(f"Quantity for variant {variant_id} must be positive, got {quantity}")


# ---------- business rules ----------

class DiscountInvalid(BusinessRuleError):
    code = "DISCOUNT_INVALID"

    def __init__(self, message: str = "Discount not found or inactive"):
        super().__init__(message)


class DiscountNotYetValid(BusinessRuleError):
    code = "DISCOUNT_NOT_YET_VALID"

    def __init__(self):
        super().__init__("Discount not yet valid")


class DiscountExpired(BusinessRuleError):
    code = "DISCOUNT_EXPIRED"

    def __init__(self):
        super().__init__("Discount has expired")


class DiscountUsageLimitReached(BusinessRuleError):
    code = "DISCOUNT_USAGE_LIMIT_REACHED"

    def __init__(self):
        super().__init__("Discount usage limit exceeded")


class DiscountMinimumNotMet(BusinessRuleError):
    code = "DISCOUNT_MINIMUM_NOT_MET"

    def __init__(self, min_order_amount: float):
        super().__init__(f"Minimum order amount of {min_order_amount} required for this discount")
        self.min_order_amount = min_order_amount


class InsufficientStock(BusinessRuleError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_name: str, variant_label: str, product_id: int, variant_id: int):
        super().__init__(f"Insufficient stock for {product_name} - {variant_label}")
        self.product_id = product_id
        self.variant_id = variant_id


class CannotCancelCompleted(BusinessRuleError):
    code = "CANNOT_CANCEL_COMPLETED"

    def __init__(self):
        super().__init__("Cannot cancel completed order")


class AlreadyCancelled(BusinessRuleError):
    code = "ALREADY_CANCELLED"

    def __init__(self):
        super().__init__("Order is already cancelled")


class InvalidStatusTransition(BusinessRuleError):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from {current} to {target}")
