from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from ..models import Order
from ..permissions import IsCustomerOwner
from ..serializers import OrderSerializer, OrderTrackingSerializer


class CustomerOrderQuerysetMixin:
    def get_queryset(self):
        return Order.objects.filter(
            customer=self.request.user
        ).select_related('restaurant', 'delivery_address', 'customer').prefetch_related('order_items')


class OrderListView(CustomerOrderQuerysetMixin, generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'payment_status', 'restaurant']


class OrderDetailView(CustomerOrderQuerysetMixin, generics.RetrieveAPIView):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsCustomerOwner]
    lookup_field = 'order_id'


class OrderTrackingView(CustomerOrderQuerysetMixin, generics.RetrieveAPIView):
    serializer_class = OrderTrackingSerializer
    permission_classes = [IsAuthenticated, IsCustomerOwner]
    lookup_field = 'order_id'
