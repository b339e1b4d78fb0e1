import logging
from django.db import transaction
from django.db.models import F
from rest_framework.exceptions import ValidationError
from ..exceptions import NotFound
from ..models import Cart, CartItem, MenuItem, Restaurant
from .cart_pricing import CartPricingEngine, CatalogPriceLookup, normalize_variations, normalize_add_ons, selection_key

logger = logging.getLogger(__name__)


class CartService:

    def __init__(self, pricing_engine=None):
        self.pricing_engine = pricing_engine or CartPricingEngine(CatalogPriceLookup())

    def get_or_create_cart(self, user):
        cart, created = Cart.objects.get_or_create(user=user)
        if created:
            logger.info(f"Created cart {cart.cart_id} for user {user.pk}")
        return cart

    def add_to_cart(self, user, data):
        """
        Add a menu item with its selections to the user's cart.

        The same menu item, restaurant and selection set always lands on a
        single row: the row is upserted under the cart lock and its
        quantity bumped in the database. Returns (cart_item, created).
        """
        menu_item = MenuItem.objects.select_related('category').filter(pk=data['menu_item_id']).first()
        if menu_item is None:
            raise NotFound('Menu item not found')

        restaurant = Restaurant.objects.filter(pk=data['restaurant_id']).first()
        if restaurant is None:
            raise NotFound('Restaurant not found')

        if menu_item.category.restaurant_id != restaurant.restaurant_id:
            raise ValidationError({'menuItemId': ['Menu item does not belong to this restaurant']})

        selected_variations = normalize_variations(data.get('selected_variations'))
        selected_add_ons = normalize_add_ons(data.get('selected_add_ons'))
        key = selection_key(selected_variations, selected_add_ons)
        quantity = data['quantity']
        special_notes = data.get('special_notes')

        with transaction.atomic():
            cart = self.get_or_create_cart(user)
            cart = Cart.objects.select_for_update().get(pk=cart.pk)

            cart_item, created = CartItem.objects.get_or_create(
                cart=cart,
                menu_item=menu_item,
                restaurant=restaurant,
                selection_key=key,
                defaults={
                    'quantity': quantity,
                    'special_notes': special_notes,
                    'selected_variations': selected_variations,
                    'selected_add_ons': selected_add_ons,
                }
            )

            if not created:
                updates = {'quantity': F('quantity') + quantity}
                if special_notes is not None:
                    updates['special_notes'] = special_notes
                CartItem.objects.filter(pk=cart_item.pk).update(**updates)
                cart_item.refresh_from_db()

        logger.info(
            f"Cart {cart.cart_id}: {'added' if created else 'incremented'} item {menu_item.item_id} "
            f"(quantity now {cart_item.quantity})"
        )
        return cart_item, created

    def _get_owned_item(self, user, cart_item_id):
        cart_item = CartItem.objects.filter(pk=cart_item_id, cart__user=user).first()
        if cart_item is None:
            raise NotFound('Cart item not found')
        return cart_item

    @transaction.atomic
    def update_cart_item(self, user, cart_item_id, data):
        cart_item = self._get_owned_item(user, cart_item_id)

        if 'quantity' in data:
            cart_item.quantity = data['quantity']
        if 'special_notes' in data:
            cart_item.special_notes = data['special_notes']

        cart_item.save()
        return cart_item

    @transaction.atomic
    def remove_cart_item(self, user, cart_item_id):
        cart_item = self._get_owned_item(user, cart_item_id)
        cart_item.delete()

    @transaction.atomic
    def clear_cart(self, user):
        cart = Cart.objects.filter(user=user).first()
        if cart is None:
            raise NotFound('Cart not found')

        deleted, _ = cart.cart_items.all().delete()
        logger.info(f"Cleared cart {cart.cart_id} ({deleted} rows)")
        return deleted

    def get_cart_items(self, cart):
        return list(cart.cart_items.select_related('menu_item', 'restaurant'))

    def get_cart_summary(self, user):
        cart = Cart.objects.filter(user=user).first()
        if cart is None:
            return self.pricing_engine.summarize(None, [])

        return self.pricing_engine.summarize(cart.cart_id, self.get_cart_items(cart))
