from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import Mock, patch
import stripe
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APITestCase, APIClient
from marketplace.exceptions import NotFound, Unauthorized, NotRefundable, AmountExceedsCapacity
from marketplace.models import Order, OrderStatusLog
from marketplace.services.refund_service import RefundService, to_cents
from .helpers import MarketplaceDataMixin, create_user


def make_gateway(refund_status='succeeded', amount=1460, latest_charge='ch_123'):
    gateway = Mock()
    gateway.PaymentIntent.retrieve.return_value = SimpleNamespace(latest_charge=latest_charge)
    gateway.Refund.create.return_value = SimpleNamespace(id='re_123', amount=amount, status=refund_status)
    return gateway


class RefundServiceTests(MarketplaceDataMixin, TestCase):
    def setUp(self):
        self.build_catalog()
        self.gateway = make_gateway()
        self.service = RefundService(gateway=self.gateway)

    def paid_card_order(self, **extra):
        return self.create_order(
            payment_method=Order.CARD,
            payment_status=Order.PAYMENT_PAID,
            stripe_payment_intent_id='pi_123',
            paid_at=timezone.now(),
            **extra
        )

    def test_to_cents(self):
        self.assertEqual(to_cents(Decimal('14.60')), 1460)
        self.assertEqual(to_cents(Decimal('0.05')), 5)

    def test_full_card_refund(self):
        order = self.paid_card_order()

        result = self.service.refund_order(order.order_id, actor_id=self.owner_user.pk, actor_role='restaurant')

        self.assertEqual(result, {'id': 're_123', 'amount': 1460, 'status': 'succeeded'})
        self.gateway.PaymentIntent.retrieve.assert_called_once_with('pi_123')
        kwargs = self.gateway.Refund.create.call_args.kwargs
        self.assertEqual(kwargs['payment_intent'], 'pi_123')
        self.assertNotIn('amount', kwargs)
        self.assertEqual(kwargs['metadata']['order_number'], order.order_number)
        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_REFUNDED)
        self.assertIsNone(order.paid_at)
        self.assertTrue(OrderStatusLog.objects.filter(order=order, to_status='REFUNDED').exists())

    def test_partial_refund_passes_amount(self):
        order = self.paid_card_order()

        self.service.refund_order(order.order_id, amount=500, actor_id=self.customer_user.pk, actor_role='customer')

        self.assertEqual(self.gateway.Refund.create.call_args.kwargs['amount'], 500)

    def test_amount_over_total_is_rejected(self):
        order = self.paid_card_order()

        with self.assertRaises(AmountExceedsCapacity):
            self.service.refund_order(order.order_id, amount=1461, actor_id=self.admin_user.pk, actor_role='admin')

        self.gateway.Refund.create.assert_not_called()

    def test_zero_amount_is_rejected(self):
        order = self.paid_card_order()

        with self.assertRaises(ValidationError):
            self.service.refund_order(order.order_id, amount=0, actor_id=self.admin_user.pk, actor_role='admin')

    def test_missing_order(self):
        with self.assertRaises(NotFound):
            self.service.refund_order(99999, actor_role='admin')

    def test_card_order_without_intent_is_not_refundable(self):
        order = self.create_order(payment_method=Order.CARD, payment_status=Order.PAYMENT_PAID)

        with self.assertRaises(NotRefundable) as ctx:
            self.service.refund_order(order.order_id, actor_role='admin')

        self.assertEqual(str(ctx.exception.detail), 'No payment to refund')

    def test_unpaid_card_order_is_not_refundable(self):
        order = self.create_order(payment_method=Order.CARD, stripe_payment_intent_id='pi_123')

        with self.assertRaises(NotRefundable):
            self.service.refund_order(order.order_id, actor_role='admin')

    def test_stranger_cannot_refund(self):
        order = self.paid_card_order()
        stranger = create_user('stranger')

        with self.assertRaises(Unauthorized):
            self.service.refund_order(order.order_id, actor_id=stranger.pk, actor_role='customer')

        self.gateway.Refund.create.assert_not_called()

    def test_intent_without_charge_is_not_refundable(self):
        self.gateway.PaymentIntent.retrieve.return_value = SimpleNamespace(latest_charge=None)
        order = self.paid_card_order()

        with self.assertRaises(NotRefundable):
            self.service.refund_order(order.order_id, actor_role='admin')

    def test_stripe_error_becomes_not_refundable(self):
        self.gateway.Refund.create.side_effect = stripe.StripeError('Charge already refunded')
        order = self.paid_card_order()

        with self.assertRaises(NotRefundable):
            self.service.refund_order(order.order_id, actor_role='admin')

        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_PAID)

    def test_failed_stripe_refund_leaves_order_paid(self):
        self.gateway.Refund.create.return_value = SimpleNamespace(id='re_9', amount=1460, status='failed')
        order = self.paid_card_order()

        result = self.service.refund_order(order.order_id, actor_role='admin')

        self.assertEqual(result['status'], 'failed')
        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_PAID)

    def test_cash_refund_by_restaurant(self):
        order = self.create_order(payment_status=Order.PAYMENT_PAID, paid_at=timezone.now())

        result = self.service.refund_order(order.order_id, actor_id=self.owner_user.pk, actor_role='restaurant')

        self.assertTrue(result['id'].startswith(f'cod_refund_{order.order_id}_'))
        self.assertEqual(result['amount'], 1460)
        self.assertEqual(result['status'], 'succeeded')
        self.gateway.Refund.create.assert_not_called()
        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_REFUNDED)

    def test_cash_refund_by_customer_is_unauthorized(self):
        order = self.create_order(payment_status=Order.PAYMENT_PAID, paid_at=timezone.now())

        with self.assertRaises(Unauthorized):
            self.service.refund_order(order.order_id, actor_id=self.customer_user.pk, actor_role='customer')

    def test_unpaid_cash_order_is_not_refundable(self):
        order = self.create_order()

        with self.assertRaises(NotRefundable):
            self.service.refund_order(order.order_id, actor_id=self.admin_user.pk, actor_role='admin')


class RefundApiTests(MarketplaceDataMixin, APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.build_catalog()

    def test_customer_refunds_own_card_order(self):
        order = self.create_order(
            payment_method=Order.CARD,
            payment_status=Order.PAYMENT_PAID,
            stripe_payment_intent_id='pi_123'
        )
        self.client.force_authenticate(user=self.customer_user)

        with patch('marketplace.services.refund_service.stripe') as gateway:
            gateway.StripeError = stripe.StripeError
            gateway.PaymentIntent.retrieve.return_value = SimpleNamespace(latest_charge='ch_1')
            gateway.Refund.create.return_value = SimpleNamespace(id='re_1', amount=1000, status='pending')
            response = self.client.post(
                reverse('order_refund', args=[order.order_id]), {'amount': 1000}, format='json'
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'id': 're_1', 'amount': 1000, 'status': 'pending'})
        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_REFUNDED)

    def test_refund_over_total_returns_400(self):
        order = self.create_order(payment_status=Order.PAYMENT_PAID)
        self.client.force_authenticate(user=self.owner_user)

        response = self.client.post(reverse('order_refund', args=[order.order_id]), {'amount': 99999}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Refund amount cannot exceed order total')
