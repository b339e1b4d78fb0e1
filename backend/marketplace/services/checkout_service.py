import logging
from decimal import Decimal
from django.db import transaction
from django.utils import timezone
from django.utils.crypto import get_random_string
from rest_framework.exceptions import ValidationError
from ..exceptions import NotFound, Unauthorized
from ..models import Cart, DeliveryAddress, PromoCode, Order, OrderItem, OrderStatusLog
from .cart_pricing import CartPricingEngine, CatalogPriceLookup, to_money, ZERO

logger = logging.getLogger(__name__)

UPPERCASE_ALPHANUMERIC = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'


def generate_order_number():
    while True:
        order_number = f"#{get_random_string(4, '0123456789')}{get_random_string(4, UPPERCASE_ALPHANUMERIC)}"
        if not Order.objects.filter(order_number=order_number).exists():
            return order_number


class CheckoutService:
    """Turns a single-restaurant cart into an order with frozen line prices."""

    def __init__(self, pricing_engine=None, notifier=None):
        self.pricing_engine = pricing_engine or CartPricingEngine(CatalogPriceLookup())
        self.notifier = notifier

    def _get_cart_items(self, user, lock=False):
        carts = Cart.objects.select_for_update() if lock else Cart.objects
        cart = carts.filter(user=user).first()
        if cart is None:
            return None, []
        items = cart.cart_items.select_related('menu_item', 'restaurant')
        return cart, [item for item in items if item.menu_item is not None]

    def _single_restaurant(self, items):
        restaurant_ids = {item.restaurant_id for item in items}
        if len(restaurant_ids) > 1:
            raise ValidationError(
                {'cart': ['All items must be from the same restaurant to checkout']}
            )
        return items[0].restaurant

    def get_checkout_summary(self, user):
        cart, items = self._get_cart_items(user)
        if not items:
            raise ValidationError({'cart': ['Cart is empty']})
        self._single_restaurant(items)

        summary = self.pricing_engine.summarize(cart.cart_id, items)
        addresses = DeliveryAddress.objects.filter(user=user)
        summary['deliveryAddresses'] = [
            {
                'id': address.address_id,
                'label': address.label,
                'address': address.address,
                'city': address.city,
                'postalCode': address.postal_code,
                'isDefault': address.is_default,
            }
            for address in addresses
        ]
        return summary

    def _discount_for(self, code, subtotal):
        if not code:
            return None, ZERO

        now = timezone.now()
        promo = PromoCode.objects.filter(
            code=code,
            is_active=True,
            start_date__lte=now,
            end_date__gte=now
        ).first()
        if promo is None:
            logger.info(f"Promo code {code} not applicable, ignoring")
            return None, ZERO

        return promo, to_money(subtotal * promo.discount_percentage / Decimal('100'))

    def create_order(self, user, data):
        """
        Place an order from the user's cart.

        The cart row stays locked from the first read to the final delete,
        so a concurrent add or checkout waits for this one. Only the rows
        snapshotted into the order are removed.
        """
        with transaction.atomic():
            cart, items = self._get_cart_items(user, lock=True)
            if not items:
                raise ValidationError({'cart': ['Cart is empty']})

            address = DeliveryAddress.objects.filter(pk=data['delivery_address_id']).first()
            if address is None:
                raise NotFound('Delivery address not found')
            if address.user_id != user.pk:
                raise Unauthorized('Delivery address does not belong to you')

            restaurant = self._single_restaurant(items)

            prices = self.pricing_engine.load_prices(items)
            lines = []
            subtotal = ZERO
            for item in items:
                unit_price = self.pricing_engine.resolve_unit_price(
                    item.menu_item.price,
                    item.selected_variations,
                    item.selected_add_ons,
                    prices
                )
                subtotal += unit_price * item.quantity
                lines.append((item, to_money(unit_price)))
            subtotal = to_money(subtotal)

            promo, discount = self._discount_for(data.get('promo_code'), subtotal)

            order = Order.objects.create(
                order_number=generate_order_number(),
                customer=user,
                restaurant=restaurant,
                delivery_address=address,
                promo_code=promo,
                payment_method=data['payment_method'],
                stripe_payment_intent_id=data.get('payment_intent_id') or None,
                special_instructions=data.get('special_instructions') or None,
                subtotal=subtotal,
                tax=data.get('tax') or ZERO,
                delivery_fee=data.get('delivery_fee') or ZERO,
                discount=discount,
            )

            for item, unit_price in lines:
                OrderItem.objects.create(
                    order=order,
                    menu_item=item.menu_item,
                    item_name=item.menu_item.name,
                    unit_price=unit_price,
                    quantity=item.quantity,
                    special_notes=item.special_notes,
                    selected_variations=item.selected_variations or [],
                    selected_add_ons=item.selected_add_ons or [],
                )

            OrderStatusLog.objects.create(
                order=order,
                kind='order',
                from_status=None,
                to_status=order.status,
                note='Order placed',
                changed_by=user
            )

            cart.cart_items.filter(pk__in=[item.cart_item_id for item, _ in lines]).delete()

        logger.info(f"Order {order.order_number} placed by user {user.pk} at restaurant {restaurant.restaurant_id}")

        if self.notifier is not None:
            try:
                self.notifier.notify_restaurant_and_admin_new_order(order)
            except Exception as e:
                logger.warning(f"Failed to notify restaurant about new order {order.order_number}: {str(e)}")

        return order
