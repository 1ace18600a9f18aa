from app.models.user import User
from app.models.product import Product, Variant
from app.models.coupon import Coupon
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.delivery_zone import DeliveryZone

# add ALL models here
