from .user_models import User, DeliveryAddress
from .restaurant_models import Mall, Restaurant
from .menu_models import MenuCategory, MenuItem, ProductVariation, VariationOption, ProductAddOn, AddOnOption
from .order_models import Cart, CartItem, PromoCode, Order, OrderItem, OrderStatusLog


__all__ = [ 'User', 'DeliveryAddress', 'Mall', 'Restaurant', 'MenuCategory', 'MenuItem', 'ProductVariation', 'VariationOption', 'ProductAddOn', 'AddOnOption', 'Cart', 'CartItem', 'PromoCode', 'Order', 'OrderItem', 'OrderStatusLog' ]
