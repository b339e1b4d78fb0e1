from decimal import Decimal
from rest_framework import serializers
from ..models import Order


class CheckoutSerializer(serializers.Serializer):
    deliveryAddressId = serializers.IntegerField(source='delivery_address_id', min_value=1)
    paymentMethod = serializers.ChoiceField(source='payment_method', choices=Order.PAYMENT_METHOD_CHOICES)
    promoCode = serializers.CharField(source='promo_code', max_length=50, required=False, allow_blank=True)
    paymentIntentId = serializers.CharField(source='payment_intent_id', max_length=255, required=False, allow_blank=True)
    specialInstructions = serializers.CharField(
        source='special_instructions', max_length=1000, required=False, allow_blank=True
    )
    tax = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'), default=Decimal('0'))
    deliveryFee = serializers.DecimalField(
        source='delivery_fee', max_digits=10, decimal_places=2, min_value=Decimal('0'), default=Decimal('0')
    )

    def validate(self, data):
        if data['payment_method'] == Order.CARD and not data.get('payment_intent_id'):
            raise serializers.ValidationError({'paymentIntentId': ["Card payments require a payment intent"]})
        return data
