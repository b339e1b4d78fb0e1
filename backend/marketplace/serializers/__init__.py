from .cartSerializers import SelectedVariationSerializer, SelectedAddOnSerializer, AddToCartSerializer, UpdateCartItemSerializer, CartItemSerializer, CartSerializer
from .checkoutSerializers import CheckoutSerializer
from .orderSerializer import OrderItemSerializer, OrderStatusLogSerializer, OrderSerializer, OrderTrackingSerializer, UpdateOrderStatusSerializer, UpdatePaymentStatusSerializer, RefundRequestSerializer


__all__ = [ 'SelectedVariationSerializer', 'SelectedAddOnSerializer', 'AddToCartSerializer', 'UpdateCartItemSerializer', 'CartItemSerializer', 'CartSerializer', 'CheckoutSerializer', 'OrderItemSerializer', 'OrderStatusLogSerializer', 'OrderSerializer', 'OrderTrackingSerializer', 'UpdateOrderStatusSerializer', 'UpdatePaymentStatusSerializer', 'RefundRequestSerializer' ]
