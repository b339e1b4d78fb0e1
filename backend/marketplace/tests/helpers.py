from decimal import Decimal
from django.contrib.auth import get_user_model
from marketplace.models import (
    Restaurant, MenuCategory, MenuItem, ProductVariation, VariationOption,
    ProductAddOn, AddOnOption, DeliveryAddress, Order
)

User = get_user_model()


def create_user(username, user_type='customer', **extra):
    return User.objects.create_user(
        username=username,
        email=f'{username}@example.com',
        password='Testpass123!',
        user_type=user_type,
        is_active=True,
        **extra
    )


class MarketplaceDataMixin:
    """Builds one restaurant with a burger that has a size and a toppings group."""

    def build_catalog(self):
        self.customer_user = create_user('customer')
        self.owner_user = create_user('owner', user_type='restaurant')
        self.admin_user = create_user('admin', user_type='admin')

        self.restaurant = Restaurant.objects.create(
            owner=self.owner_user,
            name='Burger Spot',
            main_category='Burgers'
        )
        self.category = MenuCategory.objects.create(
            restaurant=self.restaurant,
            name='Burgers',
            display_order=1
        )
        self.menu_item = MenuItem.objects.create(
            category=self.category,
            name='Classic Burger',
            price=Decimal('4.40'),
            is_available=True
        )

        self.size = ProductVariation.objects.create(menu_item=self.menu_item, name='Size', is_required=True)
        self.large = VariationOption.objects.create(variation=self.size, name='Large', price_modifier=Decimal('1.00'))
        self.small = VariationOption.objects.create(variation=self.size, name='Small', price_modifier=Decimal('-0.50'))

        self.toppings = ProductAddOn.objects.create(menu_item=self.menu_item, name='Toppings', max_selection=3)
        self.cheese = AddOnOption.objects.create(add_on=self.toppings, name='Cheese', price=Decimal('0.40'))
        self.bacon = AddOnOption.objects.create(add_on=self.toppings, name='Bacon', price=Decimal('1.25'))

        self.address = DeliveryAddress.objects.create(
            user=self.customer_user,
            label='Home',
            address='12 Mall Road',
            city='Dar es Salaam',
            is_default=True
        )

    def build_second_restaurant(self):
        self.other_owner = create_user('other_owner', user_type='restaurant')
        self.other_restaurant = Restaurant.objects.create(owner=self.other_owner, name='Pizza Corner')
        other_category = MenuCategory.objects.create(restaurant=self.other_restaurant, name='Pizza')
        self.other_item = MenuItem.objects.create(
            category=other_category,
            name='Margherita',
            price=Decimal('8.00')
        )

    def large_with_cheese(self):
        return {
            'selectedVariations': [
                {'variationId': self.size.variation_id, 'selectedOptionId': self.large.option_id}
            ],
            'selectedAddOns': [
                {'addOnId': self.toppings.add_on_id, 'selectedOptionIds': [self.cheese.option_id]}
            ],
        }

    def create_order(self, status=Order.PENDING, payment_method=Order.CASH,
                     payment_status=Order.PAYMENT_PENDING, **extra):
        self._order_counter = getattr(self, '_order_counter', 0) + 1
        return Order.objects.create(
            order_number=f'#{1000 + self._order_counter}TEST',
            customer=self.customer_user,
            restaurant=self.restaurant,
            delivery_address=self.address,
            status=status,
            payment_method=payment_method,
            payment_status=payment_status,
            subtotal=Decimal('11.60'),
            tax=Decimal('1.00'),
            delivery_fee=Decimal('2.00'),
            **extra
        )
