from django.urls import path
from .views.cartViews import CartDetailView, CartSummaryView, CartItemAddView, CartItemDetailView, CartClearView
from .views.checkoutViews import CheckoutView, CheckoutSummaryView
from .views.orderViews import OrderListView, OrderDetailView, OrderTrackingView
from .views.restaurantOrderViews import RestaurantOrderListView, RestaurantOrderStatusView, RestaurantOrderPaymentStatusView
from .views.paymentViews import OrderRefundView

urlpatterns = [
    # Cart
    path('cart/cart/', CartDetailView.as_view(), name='cart_detail'),
    path('cart/cart/summary/', CartSummaryView.as_view(), name='cart_summary'),
    path('cart/item/add/', CartItemAddView.as_view(), name='cart_item_add'),
    path('cart/item/<int:pk>/', CartItemDetailView.as_view(), name='cart_item_detail'),
    path('cart/clear/', CartClearView.as_view(), name='cart_clear'),

    # Checkout
    path('checkout/', CheckoutView.as_view(), name='checkout'),
    path('checkout/summary/', CheckoutSummaryView.as_view(), name='checkout_summary'),

    # Customer orders
    path('orders/', OrderListView.as_view(), name='order_list'),
    path('orders/<int:order_id>/', OrderDetailView.as_view(), name='order_detail'),
    path('orders/<int:order_id>/tracking/', OrderTrackingView.as_view(), name='order_tracking'),

    # Restaurant order management
    path('restaurants/<int:restaurant_id>/orders/', RestaurantOrderListView.as_view(), name='restaurant_order_list'),
    path('restaurants/<int:restaurant_id>/orders/<int:order_id>/status/', RestaurantOrderStatusView.as_view(), name='restaurant_order_status'),
    path('restaurants/<int:restaurant_id>/orders/<int:order_id>/payment-status/', RestaurantOrderPaymentStatusView.as_view(), name='restaurant_order_payment_status'),

    # Payments
    path('payments/orders/<int:order_id>/refund/', OrderRefundView.as_view(), name='order_refund'),
]
