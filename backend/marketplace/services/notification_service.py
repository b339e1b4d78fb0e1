import logging
import requests
from django.conf import settings
from ..models import Order, User

logger = logging.getLogger(__name__)


ORDER_STATUS_MESSAGES = {
    Order.ACCEPTED: ('Order Accepted', 'Your order {order_number} has been accepted by {restaurant}.'),
    Order.PREPARING: ('Order Preparing', '{restaurant} is preparing your order {order_number}.'),
    Order.READY: ('Order Ready', 'Your order {order_number} is ready.'),
    Order.OUT_FOR_DELIVERY: ('Order On The Way', 'Your order {order_number} is out for delivery.'),
    Order.DELIVERED: ('Order Delivered', 'Your order {order_number} has been delivered. Enjoy your meal!'),
    Order.REJECTED: ('Order Declined', '{restaurant} could not accept your order {order_number}.'),
    Order.CANCELLED: ('Order Cancelled', 'Your order {order_number} has been cancelled.'),
}


def is_expo_token(token):
    return bool(token) and (token.startswith('ExponentPushToken[') or token.startswith('ExpoPushToken['))


class ExpoPushNotifier:
    """
    Sends order notifications through the Expo push API.

    Delivery errors are raised to the caller; the order services decide
    whether a failed push matters.
    """

    def __init__(self, session=None, push_url=None, timeout=None):
        self.session = session or requests.Session()
        self.push_url = push_url or settings.EXPO_PUSH_URL
        self.timeout = timeout or settings.PUSH_NOTIFICATION_TIMEOUT

    def send(self, tokens, title, body, data=None):
        tokens = [token for token in tokens if is_expo_token(token)]
        if not tokens:
            return 0

        messages = [
            {
                'to': token,
                'sound': 'default',
                'title': title,
                'body': body,
                'data': data or {},
            }
            for token in tokens
        ]

        response = self.session.post(
            self.push_url,
            json=messages,
            headers={'Accept': 'application/json', 'Content-Type': 'application/json'},
            timeout=self.timeout
        )
        response.raise_for_status()
        logger.info(f"Sent push '{title}' to {len(tokens)} device(s)")
        return len(tokens)

    def _order_data(self, order, event):
        return {
            'type': event,
            'orderId': order.order_id,
            'orderNumber': order.order_number,
            'status': order.status,
        }

    def _restaurant_and_admin_tokens(self, order):
        tokens = [order.restaurant.owner.expo_push_token]
        admin_tokens = User.objects.filter(
            user_type='admin',
            expo_push_token__isnull=False
        ).exclude(pk=order.restaurant.owner_id).values_list('expo_push_token', flat=True)
        tokens.extend(admin_tokens)
        return tokens

    def notify_user_order_status(self, order):
        message = ORDER_STATUS_MESSAGES.get(order.status)
        if message is None:
            return 0

        title, body = message
        body = body.format(order_number=order.order_number, restaurant=order.restaurant.name)
        return self.send(
            [order.customer.expo_push_token],
            title,
            body,
            self._order_data(order, 'order_status')
        )

    def notify_restaurant_and_admin_cancelled(self, order):
        body = f"Order {order.order_number} at {order.restaurant.name} was {order.get_status_display().lower()}."
        return self.send(
            self._restaurant_and_admin_tokens(order),
            'Order Cancelled',
            body,
            self._order_data(order, 'order_cancelled')
        )

    def notify_restaurant_and_admin_new_order(self, order):
        body = f"New order {order.order_number} for {order.restaurant.name}: {order.total}"
        return self.send(
            self._restaurant_and_admin_tokens(order),
            'New Order Received',
            body,
            self._order_data(order, 'new_order')
        )
