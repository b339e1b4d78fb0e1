from rest_framework import serializers
from ..models import Cart, CartItem


class SelectedVariationSerializer(serializers.Serializer):
    variationId = serializers.IntegerField(min_value=1)
    selectedOptionId = serializers.IntegerField(min_value=1)


class SelectedAddOnSerializer(serializers.Serializer):
    addOnId = serializers.IntegerField(min_value=1)
    selectedOptionIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True
    )

    def validate_selectedOptionIds(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Add-on options must not repeat")
        return value


class AddToCartSerializer(serializers.Serializer):
    menuItemId = serializers.IntegerField(source='menu_item_id', min_value=1)
    restaurantId = serializers.IntegerField(source='restaurant_id', min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)
    specialNotes = serializers.CharField(
        source='special_notes', max_length=500, required=False, allow_blank=True, allow_null=True
    )
    selectedVariations = SelectedVariationSerializer(source='selected_variations', many=True, required=False)
    selectedAddOns = SelectedAddOnSerializer(source='selected_add_ons', many=True, required=False)

    def validate_selectedVariations(self, value):
        variation_ids = [variation['variationId'] for variation in value]
        if len(set(variation_ids)) != len(variation_ids):
            raise serializers.ValidationError("Only one option may be chosen per variation")
        return value


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, required=False)
    specialNotes = serializers.CharField(
        source='special_notes', max_length=500, required=False, allow_blank=True, allow_null=True
    )

    def validate(self, data):
        if not data:
            raise serializers.ValidationError("Provide a quantity or special notes to update")
        return data


class CartItemSerializer(serializers.ModelSerializer):
    menu_item_name = serializers.CharField(source='menu_item.name', read_only=True)
    base_price = serializers.DecimalField(source='menu_item.price', read_only=True, max_digits=10, decimal_places=2)
    restaurant_name = serializers.CharField(source='restaurant.name', read_only=True)

    class Meta:
        model = CartItem
        fields = [
            'cart_item_id', 'menu_item', 'menu_item_name', 'base_price', 'restaurant',
            'restaurant_name', 'quantity', 'special_notes', 'selected_variations',
            'selected_add_ons', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    items = CartItemSerializer(source='cart_items', many=True, read_only=True)
    total_items = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ['cart_id', 'user', 'items', 'total_items', 'created_at', 'updated_at']
        read_only_fields = fields

    def get_total_items(self, obj):
        return obj.cart_items.count()
