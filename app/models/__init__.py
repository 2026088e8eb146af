from app.models.user import User, Role
from app.models.address import Address
from app.models.product import Product, ProductVariant
from app.models.discount import Discount, DiscountType
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.order_status_history import OrderStatusHistory

# add ALL models here
