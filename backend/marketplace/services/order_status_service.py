import logging
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from ..exceptions import NotFound, Unauthorized, InvalidTransition, InvalidOperation
from ..models import Order, OrderStatusLog

logger = logging.getLogger(__name__)


ORDER_TRANSITIONS = {
    Order.PENDING: {Order.ACCEPTED, Order.REJECTED},
    Order.ACCEPTED: {Order.PREPARING, Order.CANCELLED},
    Order.PREPARING: {Order.READY},
    Order.READY: {Order.OUT_FOR_DELIVERY},
    Order.OUT_FOR_DELIVERY: {Order.DELIVERED},
    Order.DELIVERED: set(),
    Order.REJECTED: set(),
    Order.CANCELLED: set(),
}

PAYMENT_TRANSITIONS = {
    Order.PAYMENT_PENDING: {Order.PAYMENT_PAID, Order.PAYMENT_FAILED},
    Order.PAYMENT_PAID: {Order.PAYMENT_REFUNDED, Order.PAYMENT_PENDING},
    Order.PAYMENT_FAILED: {Order.PAYMENT_PAID, Order.PAYMENT_PENDING},
    Order.PAYMENT_REFUNDED: set(),
}

STATUS_MESSAGES = {
    Order.ACCEPTED: 'Order accepted',
    Order.PREPARING: 'Order is being prepared',
    Order.READY: 'Order is ready',
    Order.OUT_FOR_DELIVERY: 'Order is out for delivery',
    Order.DELIVERED: 'Order delivered',
    Order.REJECTED: 'Order declined',
    Order.CANCELLED: 'Order cancelled',
}


def can_transition(current_status, new_status):
    return new_status in ORDER_TRANSITIONS.get(current_status, set())


def can_transition_payment(current_status, new_status):
    return new_status in PAYMENT_TRANSITIONS.get(current_status, set())


def append_note(existing, note):
    return f"{existing or ''}\n{note}".strip()


class OrderStatusService:
    """
    Drives order and cash-payment status changes for a restaurant.

    Every rule is checked before the order row is written. Refunds and
    notifications run after the change is committed and cannot undo it:
    their failures are logged here and go no further.
    """

    def __init__(self, refunder, notifier):
        self.refunder = refunder
        self.notifier = notifier

    def _get_order_for_update(self, order_id):
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound('Order not found')
        return order

    def _check_restaurant(self, order, restaurant_id):
        if order.restaurant_id != int(restaurant_id):
            raise Unauthorized('You can only manage orders for your own restaurant')

    def update_order_status(self, order_id, restaurant_id, new_status,
                            estimated_delivery_time=None, reason=None, actor=None):
        with transaction.atomic():
            order = self._get_order_for_update(order_id)
            self._check_restaurant(order, restaurant_id)

            previous_status = order.status
            if not can_transition(previous_status, new_status):
                raise InvalidTransition(f"Cannot transition order from {previous_status} to {new_status}")

            reason = (reason or '').strip()
            if new_status == Order.REJECTED and not reason:
                raise ValidationError({'reason': ['A reason is required to decline an order']})

            now = timezone.now()
            previous_payment_status = order.payment_status
            order.status = new_status

            if estimated_delivery_time:
                order.estimated_delivery_time = estimated_delivery_time

            if new_status == Order.DELIVERED:
                order.actual_delivery_time = now
                # Cash on delivery is collected by the driver
                if order.payment_method == Order.CASH and order.payment_status == Order.PAYMENT_PENDING:
                    order.payment_status = Order.PAYMENT_PAID
                    order.paid_at = now

            if new_status == Order.REJECTED:
                order.special_instructions = append_note(
                    order.special_instructions,
                    f"Restaurant decline reason: {reason}"
                )

            order.save()

            OrderStatusLog.objects.create(
                order=order,
                kind='order',
                from_status=previous_status,
                to_status=new_status,
                note=reason or None,
                changed_by=actor
            )
            if order.payment_status != previous_payment_status:
                OrderStatusLog.objects.create(
                    order=order,
                    kind='payment',
                    from_status=previous_payment_status,
                    to_status=order.payment_status,
                    note='Cash collected on delivery',
                    changed_by=actor
                )

        logger.info(f"Order {order.order_number}: {previous_status} -> {new_status}")

        refund_initiated = False
        if (new_status == Order.REJECTED
                and order.payment_method == Order.CARD
                and order.payment_status == Order.PAYMENT_PAID
                and order.stripe_payment_intent_id):
            refund_initiated = self._refund_rejected_order(order, actor)
            order.refresh_from_db()

        self._notify_status_change(order)

        return {
            'id': order.order_id,
            'orderNumber': order.order_number,
            'status': order.status,
            'paymentStatus': order.payment_status,
            'customerName': order.customer.get_full_name() or order.customer.username,
            'message': STATUS_MESSAGES.get(new_status, 'Order status updated'),
            'refundInitiated': refund_initiated,
        }

    def _refund_rejected_order(self, order, actor):
        actor_id = actor.pk if actor else order.restaurant.owner_id
        if actor is None:
            actor_role = 'restaurant'
        else:
            actor_role = 'admin' if actor.is_admin else actor.user_type
        try:
            refund = self.refunder.refund_order(order.order_id, actor_id=actor_id, actor_role=actor_role)
        except Exception as e:
            logger.warning(
                f"Automatic refund failed for declined order {order.order_number}; "
                f"refund must be issued manually: {str(e)}"
            )
            return False

        logger.info(f"Refund {refund['id']} initiated for declined order {order.order_number}")
        return True

    def _notify_status_change(self, order):
        try:
            self.notifier.notify_user_order_status(order)
        except Exception as e:
            logger.warning(f"Failed to notify customer about order {order.order_number}: {str(e)}")

        if order.status in (Order.REJECTED, Order.CANCELLED):
            try:
                self.notifier.notify_restaurant_and_admin_cancelled(order)
            except Exception as e:
                logger.warning(f"Failed to notify restaurant/admin about order {order.order_number}: {str(e)}")

    def update_payment_status(self, order_id, restaurant_id, payment_status, reason=None, actor=None):
        with transaction.atomic():
            order = self._get_order_for_update(order_id)
            self._check_restaurant(order, restaurant_id)

            if order.payment_method != Order.CASH:
                raise InvalidOperation('Payment status updates are only allowed for COD (CASH) orders')

            previous_status = order.payment_status
            if not can_transition_payment(previous_status, payment_status):
                raise InvalidTransition(
                    f"Cannot transition payment status from {previous_status} to {payment_status}"
                )
            if payment_status == Order.PAYMENT_REFUNDED and previous_status != Order.PAYMENT_PAID:
                raise InvalidTransition('Only paid orders can be refunded')

            order.payment_status = payment_status
            if payment_status == Order.PAYMENT_PAID:
                order.paid_at = timezone.now()
            elif previous_status == Order.PAYMENT_PAID:
                order.paid_at = None

            reason = (reason or '').strip()
            if reason:
                order.special_instructions = append_note(
                    order.special_instructions,
                    f"[Payment Status Update: {payment_status}] {reason}"
                )

            order.save()

            OrderStatusLog.objects.create(
                order=order,
                kind='payment',
                from_status=previous_status,
                to_status=payment_status,
                note=reason or None,
                changed_by=actor
            )

        logger.info(f"Order {order.order_number} payment: {previous_status} -> {payment_status}")

        return {
            'id': order.order_id,
            'orderNumber': order.order_number,
            'status': order.status,
            'paymentStatus': order.payment_status,
            'paidAt': order.paid_at,
            'message': f"Payment status updated to {payment_status}",
        }
