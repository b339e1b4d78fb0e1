from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, DeliveryAddress, Mall, Restaurant, MenuCategory, MenuItem, ProductVariation, VariationOption, ProductAddOn, AddOnOption, Cart, CartItem, PromoCode, Order, OrderItem, OrderStatusLog


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'first_name', 'last_name', 'user_type', 'is_staff', 'is_active', 'created_at')
    list_filter = ('user_type', 'is_staff', 'is_active', 'created_at')
    search_fields = ('username', 'email', 'first_name', 'last_name')
    ordering = ('-created_at',)
    fieldsets = UserAdmin.fieldsets + (
        ('Marketplace', {'fields': ('user_type', 'phone_number', 'expo_push_token', 'created_at')}),
    )
    readonly_fields = ('created_at',)

    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Marketplace', {
            'fields': ('user_type', 'phone_number', 'email', 'first_name', 'last_name')
        }),
    )


@admin.register(DeliveryAddress)
class DeliveryAddressAdmin(admin.ModelAdmin):
    list_display = ['address_id', 'user', 'label', 'address', 'city', 'is_default']
    list_select_related = ['user']
    search_fields = ['address', 'city', 'user__username', 'user__email']
    list_filter = ['city', 'is_default']


@admin.register(Mall)
class MallAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'country', 'is_active']
    list_filter = ['country', 'city', 'is_active']
    search_fields = ['name', 'city']
    list_editable = ['is_active']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'mall', 'main_category', 'is_active', 'created_at']
    list_select_related = ['owner', 'mall']
    list_filter = ['is_active', 'mall']
    search_fields = ['name', 'owner__username', 'owner__email']
    readonly_fields = ['restaurant_id', 'created_at', 'updated_at']


@admin.register(MenuCategory)
class MenuCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'restaurant', 'display_order', 'is_active']
    list_filter = ['is_active', 'restaurant']
    search_fields = ['name', 'restaurant__name']


class ProductVariationInline(admin.TabularInline):
    model = ProductVariation
    extra = 0


class ProductAddOnInline(admin.TabularInline):
    model = ProductAddOn
    extra = 0


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'is_available']
    list_filter = ['is_available', 'category__restaurant']
    search_fields = ['name', 'description']
    list_editable = ['price', 'is_available']
    inlines = [ProductVariationInline, ProductAddOnInline]


class VariationOptionInline(admin.TabularInline):
    model = VariationOption
    extra = 0


@admin.register(ProductVariation)
class ProductVariationAdmin(admin.ModelAdmin):
    list_display = ['name', 'menu_item', 'is_required', 'display_order']
    search_fields = ['name', 'menu_item__name']
    inlines = [VariationOptionInline]


class AddOnOptionInline(admin.TabularInline):
    model = AddOnOption
    extra = 0


@admin.register(ProductAddOn)
class ProductAddOnAdmin(admin.ModelAdmin):
    list_display = ['name', 'menu_item', 'is_required', 'max_selection', 'display_order']
    search_fields = ['name', 'menu_item__name']
    inlines = [AddOnOptionInline]


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ['selection_key', 'created_at']


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ['cart_id', 'user', 'created_at', 'updated_at']
    search_fields = ['user__username', 'user__email']
    inlines = [CartItemInline]


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ['code', 'discount_percentage', 'start_date', 'end_date', 'is_active']
    list_filter = ['is_active']
    search_fields = ['code']


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['item_name', 'unit_price', 'quantity', 'total_price']


class OrderStatusLogInline(admin.TabularInline):
    model = OrderStatusLog
    extra = 0
    readonly_fields = ['kind', 'from_status', 'to_status', 'note', 'changed_by', 'created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer', 'restaurant', 'status', 'payment_method', 'payment_status', 'total', 'created_at']
    list_select_related = ['customer', 'restaurant']
    list_filter = ['status', 'payment_method', 'payment_status', 'created_at']
    search_fields = ['order_number', 'customer__username', 'customer__email', 'restaurant__name']
    readonly_fields = ['order_number', 'subtotal', 'total', 'paid_at', 'actual_delivery_time', 'created_at', 'updated_at']
    inlines = [OrderItemInline, OrderStatusLogInline]
