import logging
import stripe
from decimal import Decimal, ROUND_HALF_UP
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from ..exceptions import NotFound, Unauthorized, NotRefundable, AmountExceedsCapacity
from ..models import Order, OrderStatusLog

logger = logging.getLogger(__name__)


def to_cents(amount):
    return int((Decimal(amount) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class RefundService:
    """
    Refunds an order's payment. Amounts are in cents.

    Cash orders are settled in person, so their refund only flips the
    payment status; card orders go through Stripe.
    """

    def __init__(self, gateway=None):
        self.gateway = gateway or stripe
        if gateway is None:
            stripe.api_key = settings.STRIPE_SECRET_KEY

    def refund_order(self, order_id, amount=None, actor_id=None, actor_role=None):
        order = Order.objects.select_related('restaurant').filter(pk=order_id).first()
        if order is None:
            raise NotFound('Order not found')

        total_cents = to_cents(order.total)
        is_admin = actor_role == 'admin'
        is_restaurant = actor_role == 'restaurant' and order.restaurant.owner_id == actor_id

        if order.payment_method == Order.CASH:
            return self._refund_cash_order(order, amount, total_cents, is_admin or is_restaurant, actor_id)

        if not order.stripe_payment_intent_id:
            raise NotRefundable('No payment to refund')
        if order.payment_status != Order.PAYMENT_PAID:
            raise NotRefundable('Order is not refundable')
        if not (is_admin or is_restaurant or order.customer_id == actor_id):
            raise Unauthorized('Not authorized to refund this order')
        self._check_amount(amount, total_cents)

        return self._refund_card_order(order, amount, actor_id)

    def _check_amount(self, amount, total_cents):
        if amount is None:
            return
        if amount <= 0:
            raise ValidationError({'amount': ['Refund amount must be greater than zero']})
        if amount > total_cents:
            raise AmountExceedsCapacity()

    def _refund_cash_order(self, order, amount, total_cents, authorized, actor_id):
        if order.payment_status != Order.PAYMENT_PAID:
            raise NotRefundable('Only paid cash orders can be refunded')
        if not authorized:
            raise Unauthorized('Only the restaurant or an admin can refund cash orders')
        self._check_amount(amount, total_cents)
        amount = amount or total_cents

        with transaction.atomic():
            self._mark_refunded(order, actor_id, f"Cash refund of {amount} cents")

        logger.info(f"Recorded cash refund for order {order.order_number}")
        return {
            'id': f"cod_refund_{order.order_id}_{int(timezone.now().timestamp())}",
            'amount': amount,
            'status': 'succeeded',
        }

    def _refund_card_order(self, order, amount, actor_id):
        try:
            intent = self.gateway.PaymentIntent.retrieve(order.stripe_payment_intent_id)
            if not intent.latest_charge:
                raise NotRefundable('No charge found for this payment')

            params = {
                'payment_intent': order.stripe_payment_intent_id,
                'metadata': {
                    'order_id': str(order.order_id),
                    'order_number': order.order_number,
                },
            }
            if amount:
                params['amount'] = amount
            refund = self.gateway.Refund.create(**params)
        except stripe.StripeError as e:
            logger.error(f"Stripe refund failed for order {order.order_number}: {str(e)}")
            raise NotRefundable(f"Refund failed: {e.user_message or str(e)}")

        if refund.status in ('succeeded', 'pending'):
            with transaction.atomic():
                self._mark_refunded(order, actor_id, f"Stripe refund {refund.id}")

        logger.info(f"Stripe refund {refund.id} for order {order.order_number}: {refund.status}")
        return {
            'id': refund.id,
            'amount': refund.amount,
            'status': refund.status,
        }

    def _mark_refunded(self, order, actor_id, note):
        previous = order.payment_status
        order.payment_status = Order.PAYMENT_REFUNDED
        order.paid_at = None
        order.save(update_fields=['payment_status', 'paid_at', 'updated_at'])
        OrderStatusLog.objects.create(
            order=order,
            kind='payment',
            from_status=previous,
            to_status=Order.PAYMENT_REFUNDED,
            note=note,
            changed_by_id=actor_id
        )
