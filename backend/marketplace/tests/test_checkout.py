from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIClient
from marketplace.models import Cart, CartItem, DeliveryAddress, MenuItem, Order, OrderItem, PromoCode
from marketplace.services.cart_pricing import CartPricingEngine, CatalogPriceLookup, selection_key
from marketplace.services.checkout_service import CheckoutService
from .helpers import MarketplaceDataMixin, create_user


class CheckoutTests(MarketplaceDataMixin, APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.build_catalog()
        self.client.force_authenticate(user=self.customer_user)

    def add_item(self, menu_item=None, restaurant=None, quantity=1, **selections):
        data = {
            'menuItemId': (menu_item or self.menu_item).item_id,
            'restaurantId': (restaurant or self.restaurant).restaurant_id,
            'quantity': quantity,
        }
        data.update(selections)
        response = self.client.post(reverse('cart_item_add'), data, format='json')
        self.assertIn(response.status_code, (status.HTTP_200_OK, status.HTTP_201_CREATED))
        return response

    def checkout(self, **overrides):
        data = {
            'deliveryAddressId': self.address.address_id,
            'paymentMethod': 'CASH',
        }
        data.update(overrides)
        return self.client.post(reverse('checkout'), data, format='json')

    def test_create_order_from_cart(self):
        """Checkout snapshots resolved prices and empties the cart"""
        self.add_item(quantity=2, **self.large_with_cheese())

        response = self.checkout(tax='1.16', deliveryFee='2.50', specialInstructions='Gate 3')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(order_id=response.data['order_id'])
        self.assertEqual(order.status, Order.PENDING)
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(order.subtotal, Decimal('11.60'))
        self.assertEqual(order.total, Decimal('15.26'))
        self.assertTrue(order.order_number.startswith('#'))
        self.assertEqual(len(order.order_number), 9)

        order_item = OrderItem.objects.get(order=order)
        self.assertEqual(order_item.item_name, 'Classic Burger')
        self.assertEqual(order_item.unit_price, Decimal('5.80'))
        self.assertEqual(order_item.total_price, Decimal('11.60'))
        self.assertEqual(order_item.quantity, 2)

        self.assertFalse(CartItem.objects.exists())

    def test_order_items_are_frozen_after_checkout(self):
        self.add_item(quantity=2, **self.large_with_cheese())
        response = self.checkout()

        MenuItem.objects.filter(pk=self.menu_item.pk).update(price=Decimal('9.99'))

        order_item = OrderItem.objects.get(order_id=response.data['order_id'])
        self.assertEqual(order_item.unit_price, Decimal('5.80'))

    def test_promo_code_discount(self):
        now = timezone.now()
        PromoCode.objects.create(
            code='MALL10',
            discount_percentage=Decimal('10'),
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=1)
        )
        self.add_item(quantity=2, **self.large_with_cheese())

        response = self.checkout(promoCode='MALL10')

        order = Order.objects.get(order_id=response.data['order_id'])
        self.assertEqual(order.discount, Decimal('1.16'))
        self.assertEqual(order.total, Decimal('10.44'))
        self.assertEqual(order.promo_code.code, 'MALL10')

    def test_expired_promo_code_is_ignored(self):
        now = timezone.now()
        PromoCode.objects.create(
            code='OLD',
            discount_percentage=Decimal('50'),
            start_date=now - timedelta(days=10),
            end_date=now - timedelta(days=1)
        )
        self.add_item()

        response = self.checkout(promoCode='OLD')

        order = Order.objects.get(order_id=response.data['order_id'])
        self.assertEqual(order.discount, Decimal('0'))
        self.assertIsNone(order.promo_code)

    def test_empty_cart_cannot_checkout(self):
        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Cart is empty')
        self.assertFalse(Order.objects.exists())

    def test_multi_restaurant_cart_cannot_checkout(self):
        self.build_second_restaurant()
        self.add_item()
        self.add_item(menu_item=self.other_item, restaurant=self.other_restaurant)

        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(CartItem.objects.count(), 2)
        self.assertFalse(Order.objects.exists())

    def test_missing_address_returns_404(self):
        self.add_item()

        response = self.checkout(deliveryAddressId=99999)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_someone_elses_address_returns_403(self):
        stranger = create_user('stranger')
        address = DeliveryAddress.objects.create(user=stranger, address='1 Other St', city='Arusha')
        self.add_item()

        response = self.checkout(deliveryAddressId=address.address_id)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(CartItem.objects.count(), 1)

    def test_card_checkout_requires_payment_intent(self):
        self.add_item()

        response = self.checkout(paymentMethod='CARD')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('paymentIntentId', response.data['errors'])

    def test_new_order_notification_failure_does_not_fail_checkout(self):
        self.add_item()

        with patch(
            'marketplace.services.notification_service.ExpoPushNotifier.notify_restaurant_and_admin_new_order',
            side_effect=RuntimeError('push down')
        ) as notify:
            response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        notify.assert_called_once()

    def test_checkout_summary(self):
        self.add_item(quantity=2, **self.large_with_cheese())

        response = self.client.get(reverse('checkout_summary'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalPrice'], Decimal('11.60'))
        self.assertEqual(response.data['deliveryAddresses'][0]['id'], self.address.address_id)


class CustomerOrderTests(MarketplaceDataMixin, APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.build_catalog()
        self.client.force_authenticate(user=self.customer_user)

    def test_order_list_only_shows_own_orders(self):
        self.create_order()
        stranger = create_user('stranger')
        Order.objects.create(
            order_number='#9999ZZZZ',
            customer=stranger,
            restaurant=self.restaurant,
            subtotal=Decimal('5.00')
        )

        response = self.client.get(reverse('order_list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_order_detail_of_other_customer_returns_404(self):
        stranger = create_user('stranger')
        order = Order.objects.create(
            order_number='#9999ZZZZ',
            customer=stranger,
            restaurant=self.restaurant,
            subtotal=Decimal('5.00')
        )

        response = self.client.get(reverse('order_detail', args=[order.order_id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_order_tracking_shows_timeline(self):
        order = self.create_order()
        self.client.force_authenticate(user=self.owner_user)
        url = reverse('restaurant_order_status', args=[self.restaurant.restaurant_id, order.order_id])
        self.client.patch(url, {'status': 'ACCEPTED'}, format='json')
        self.client.patch(url, {'status': 'PREPARING'}, format='json')

        self.client.force_authenticate(user=self.customer_user)
        response = self.client.get(reverse('order_tracking', args=[order.order_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'PREPARING')
        self.assertEqual([entry['to_status'] for entry in response.data['timeline']], ['ACCEPTED', 'PREPARING'])


class CheckoutServiceTests(MarketplaceDataMixin, TestCase):
    def setUp(self):
        self.build_catalog()
        self.cart_item = CartItem.objects.create(
            cart=Cart.objects.create(user=self.customer_user),
            restaurant=self.restaurant,
            menu_item=self.menu_item,
            quantity=1,
            selection_key=selection_key([], [])
        )
        self.data = {'delivery_address_id': self.address.address_id, 'payment_method': Order.CASH}

    def test_rows_added_while_pricing_survive_checkout(self):
        engine = CartPricingEngine(CatalogPriceLookup())
        load_prices = engine.load_prices

        def add_row_then_load(items):
            CartItem.objects.create(
                cart=self.cart_item.cart,
                restaurant=self.restaurant,
                menu_item=self.menu_item,
                quantity=3,
                selection_key='late-row'
            )
            return load_prices(items)

        engine.load_prices = add_row_then_load

        order = CheckoutService(pricing_engine=engine).create_order(self.customer_user, self.data)

        self.assertEqual(OrderItem.objects.get(order=order).quantity, 1)
        self.assertEqual(list(CartItem.objects.values_list('selection_key', flat=True)), ['late-row'])

    def test_cart_is_locked_for_the_whole_checkout(self):
        with patch.object(Cart.objects, 'select_for_update', wraps=Cart.objects.select_for_update) as lock:
            CheckoutService().create_order(self.customer_user, self.data)

        lock.assert_called_once_with()
        self.assertFalse(CartItem.objects.exists())
