from decimal import Decimal
from django.db import models
from django.core.validators import MinValueValidator


class Cart(models.Model):
    cart_id = models.AutoField(primary_key=True)
    user = models.OneToOneField(
        'marketplace.User',
        on_delete=models.CASCADE,
        related_name='cart'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'

    def __str__(self):
        return f"Cart {self.cart_id} - {self.user.username}"


class CartItem(models.Model):
    cart_item_id = models.AutoField(primary_key=True)
    cart = models.ForeignKey(
        'marketplace.Cart',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    restaurant = models.ForeignKey(
        'marketplace.Restaurant',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    menu_item = models.ForeignKey(
        'marketplace.MenuItem',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    special_notes = models.TextField(blank=True, null=True)
    # [{"variationId": 1, "selectedOptionId": 3}]
    selected_variations = models.JSONField(default=list, blank=True)
    # [{"addOnId": 2, "selectedOptionIds": [5, 6]}]
    selected_add_ons = models.JSONField(default=list, blank=True)
    selection_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['created_at', 'cart_item_id']
        constraints = [
            models.UniqueConstraint(
                fields=['cart', 'menu_item', 'restaurant', 'selection_key'],
                name='unique_cart_item_selection'
            ),
        ]

    def __str__(self):
        return f"{self.quantity}x {self.menu_item.name}"


class PromoCode(models.Model):
    promo_code_id = models.AutoField(primary_key=True)
    code = models.CharField(max_length=50, unique=True)
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'promo_codes'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.code} ({self.discount_percentage}%)"


class Order(models.Model):
    PENDING = 'PENDING'
    ACCEPTED = 'ACCEPTED'
    PREPARING = 'PREPARING'
    READY = 'READY'
    OUT_FOR_DELIVERY = 'OUT_FOR_DELIVERY'
    DELIVERED = 'DELIVERED'
    REJECTED = 'REJECTED'
    CANCELLED = 'CANCELLED'

    ORDER_STATUS_CHOICES = (
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (PREPARING, 'Preparing'),
        (READY, 'Ready'),
        (OUT_FOR_DELIVERY, 'Out for Delivery'),
        (DELIVERED, 'Delivered'),
        (REJECTED, 'Rejected'),
        (CANCELLED, 'Cancelled'),
    )

    CASH = 'CASH'
    CARD = 'CARD'
    WALLET = 'WALLET'
    ONLINE = 'ONLINE'

    PAYMENT_METHOD_CHOICES = (
        (CASH, 'Cash on Delivery'),
        (CARD, 'Card'),
        (WALLET, 'Wallet'),
        (ONLINE, 'Online'),
    )

    PAYMENT_PENDING = 'PENDING'
    PAYMENT_PAID = 'PAID'
    PAYMENT_FAILED = 'FAILED'
    PAYMENT_REFUNDED = 'REFUNDED'

    PAYMENT_STATUS_CHOICES = (
        (PAYMENT_PENDING, 'Pending'),
        (PAYMENT_PAID, 'Paid'),
        (PAYMENT_FAILED, 'Failed'),
        (PAYMENT_REFUNDED, 'Refunded'),
    )

    order_id = models.AutoField(primary_key=True)
    order_number = models.CharField(max_length=20, unique=True)
    customer = models.ForeignKey(
        'marketplace.User',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    restaurant = models.ForeignKey(
        'marketplace.Restaurant',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    delivery_address = models.ForeignKey(
        'marketplace.DeliveryAddress',
        on_delete=models.SET_NULL,
        related_name='orders',
        null=True,
        blank=True
    )
    promo_code = models.ForeignKey(
        'marketplace.PromoCode',
        on_delete=models.SET_NULL,
        related_name='orders',
        null=True,
        blank=True
    )

    status = models.CharField(max_length=20, choices=ORDER_STATUS_CHOICES, default=PENDING)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_METHOD_CHOICES, default=CASH)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING)
    paid_at = models.DateTimeField(null=True, blank=True)
    stripe_payment_intent_id = models.CharField(max_length=255, blank=True, null=True)
    special_instructions = models.TextField(blank=True, null=True)

    # Pricing
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    total = models.DecimalField(max_digits=10, decimal_places=2, default=0.00)

    # Delivery
    estimated_delivery_time = models.CharField(max_length=100, blank=True, null=True)
    actual_delivery_time = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='orders_status_idx'),
            models.Index(fields=['customer', 'created_at'], name='orders_customer_created_idx'),
            models.Index(fields=['restaurant', 'created_at'], name='orders_restaurant_created_idx'),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.customer.username}"

    def save(self, *args, **kwargs):
        self.subtotal = Decimal(str(self.subtotal)) if self.subtotal else Decimal('0')
        self.tax = Decimal(str(self.tax)) if self.tax else Decimal('0')
        self.delivery_fee = Decimal(str(self.delivery_fee)) if self.delivery_fee else Decimal('0')
        self.discount = Decimal(str(self.discount)) if self.discount else Decimal('0')

        self.total = self.subtotal + self.tax + self.delivery_fee - self.discount
        super().save(*args, **kwargs)


class OrderItem(models.Model):
    """Line item frozen at checkout; later menu price changes do not touch it."""
    order_item_id = models.AutoField(primary_key=True)
    order = models.ForeignKey(
        'marketplace.Order',
        on_delete=models.CASCADE,
        related_name='order_items'
    )
    menu_item = models.ForeignKey(
        'marketplace.MenuItem',
        on_delete=models.SET_NULL,
        related_name='order_items',
        null=True,
        blank=True
    )
    item_name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    special_notes = models.TextField(blank=True, null=True)
    selected_variations = models.JSONField(default=list, blank=True)
    selected_add_ons = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['order_item_id']

    def __str__(self):
        return f"{self.quantity}x {self.item_name}"

    def save(self, *args, **kwargs):
        self.total_price = Decimal(str(self.unit_price)) * self.quantity
        super().save(*args, **kwargs)


class OrderStatusLog(models.Model):
    KIND_CHOICES = (
        ('order', 'Order Status'),
        ('payment', 'Payment Status'),
    )

    log_id = models.AutoField(primary_key=True)
    order = models.ForeignKey(
        'marketplace.Order',
        on_delete=models.CASCADE,
        related_name='status_logs'
    )
    kind = models.CharField(max_length=10, choices=KIND_CHOICES, default='order')
    from_status = models.CharField(max_length=20, blank=True, null=True)
    to_status = models.CharField(max_length=20)
    note = models.TextField(blank=True, null=True)
    changed_by = models.ForeignKey(
        'marketplace.User',
        on_delete=models.SET_NULL,
        related_name='order_status_changes',
        null=True,
        blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_status_logs'
        ordering = ['created_at', 'log_id']

    def __str__(self):
        return f"{self.order.order_number}: {self.from_status} -> {self.to_status}"
