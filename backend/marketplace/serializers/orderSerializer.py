from rest_framework import serializers
from ..models import Order, OrderItem, OrderStatusLog


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            'order_item_id', 'menu_item', 'item_name', 'unit_price', 'quantity',
            'total_price', 'special_notes', 'selected_variations', 'selected_add_ons'
        ]
        read_only_fields = fields


class OrderStatusLogSerializer(serializers.ModelSerializer):
    changed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = OrderStatusLog
        fields = ['log_id', 'kind', 'from_status', 'to_status', 'note', 'changed_by_name', 'created_at']
        read_only_fields = fields

    def get_changed_by_name(self, obj):
        if obj.changed_by is None:
            return None
        return obj.changed_by.get_full_name() or obj.changed_by.username


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(source='order_items', many=True, read_only=True)
    restaurant_name = serializers.CharField(source='restaurant.name', read_only=True)
    customer_name = serializers.SerializerMethodField()
    delivery_address_text = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'order_id', 'order_number', 'customer', 'customer_name', 'restaurant',
            'restaurant_name', 'status', 'payment_method', 'payment_status', 'paid_at',
            'subtotal', 'tax', 'delivery_fee', 'discount', 'total', 'special_instructions',
            'estimated_delivery_time', 'actual_delivery_time', 'delivery_address',
            'delivery_address_text', 'items', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        return obj.customer.get_full_name() or obj.customer.username

    def get_delivery_address_text(self, obj):
        if obj.delivery_address is None:
            return None
        return f"{obj.delivery_address.address}, {obj.delivery_address.city}"


class OrderTrackingSerializer(serializers.ModelSerializer):
    timeline = OrderStatusLogSerializer(source='status_logs', many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'order_id', 'order_number', 'status', 'payment_status',
            'estimated_delivery_time', 'actual_delivery_time', 'timeline'
        ]
        read_only_fields = fields


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.ORDER_STATUS_CHOICES)
    estimatedDeliveryTime = serializers.CharField(
        source='estimated_delivery_time', max_length=100, required=False, allow_blank=True, allow_null=True
    )
    reason = serializers.CharField(min_length=3, max_length=500, required=False, allow_null=True)

    def validate(self, data):
        if data['status'] == Order.REJECTED and not (data.get('reason') or '').strip():
            raise serializers.ValidationError({'reason': ["A reason is required to decline an order"]})
        return data


class UpdatePaymentStatusSerializer(serializers.Serializer):
    paymentStatus = serializers.ChoiceField(source='payment_status', choices=Order.PAYMENT_STATUS_CHOICES)
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class RefundRequestSerializer(serializers.Serializer):
    amount = serializers.IntegerField(min_value=1, required=False, allow_null=True, help_text="Amount in cents")
