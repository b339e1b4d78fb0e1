from rest_framework import generics
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from ..models import Order
from ..permissions import IsRestaurantOwner
from ..serializers import OrderSerializer, UpdateOrderStatusSerializer, UpdatePaymentStatusSerializer
from ..services.notification_service import ExpoPushNotifier
from ..services.order_status_service import OrderStatusService
from ..services.refund_service import RefundService


def build_order_status_service():
    return OrderStatusService(RefundService(), ExpoPushNotifier())


class RestaurantOrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsRestaurantOwner]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'payment_status', 'payment_method']

    def get_queryset(self):
        return Order.objects.filter(
            restaurant_id=self.kwargs['restaurant_id']
        ).select_related('restaurant', 'delivery_address', 'customer').prefetch_related('order_items')


class RestaurantOrderStatusView(generics.GenericAPIView):
    serializer_class = UpdateOrderStatusSerializer
    permission_classes = [IsAuthenticated, IsRestaurantOwner]

    def patch(self, request, restaurant_id, order_id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = build_order_status_service().update_order_status(
            order_id,
            restaurant_id,
            data['status'],
            estimated_delivery_time=data.get('estimated_delivery_time'),
            reason=data.get('reason'),
            actor=request.user
        )
        return Response(result)


class RestaurantOrderPaymentStatusView(generics.GenericAPIView):
    serializer_class = UpdatePaymentStatusSerializer
    permission_classes = [IsAuthenticated, IsRestaurantOwner]

    def patch(self, request, restaurant_id, order_id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = build_order_status_service().update_payment_status(
            order_id,
            restaurant_id,
            data['payment_status'],
            reason=data.get('reason'),
            actor=request.user
        )
        return Response(result)
