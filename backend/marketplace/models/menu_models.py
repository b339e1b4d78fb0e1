from django.db import models
from django.core.validators import MinValueValidator


class MenuCategory(models.Model):
    category_id = models.AutoField(primary_key=True)
    restaurant = models.ForeignKey(
        'marketplace.Restaurant',
        on_delete=models.CASCADE,
        related_name='menu_categories'
    )
    name = models.CharField(max_length=100)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'menu_categories'
        ordering = ['restaurant', 'display_order', 'name']
        verbose_name_plural = 'menu categories'

    def __str__(self):
        return f"{self.restaurant.name} - {self.name}"


class MenuItem(models.Model):
    item_id = models.AutoField(primary_key=True)
    category = models.ForeignKey(
        'marketplace.MenuCategory',
        on_delete=models.CASCADE,
        related_name='menu_items'
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    image = models.URLField(blank=True, null=True)
    preparation_time = models.IntegerField(help_text="Preparation time in minutes", default=15)
    is_available = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menu_items'
        ordering = ['category__display_order', 'display_order', 'name']
        indexes = [
            models.Index(fields=['is_available'], name='menu_items_available_idx'),
        ]

    def __str__(self):
        return f"{self.name} - ${self.price}"

    @property
    def restaurant(self):
        return self.category.restaurant


class ProductVariation(models.Model):
    """A single-choice option group on a menu item, e.g. Size."""
    variation_id = models.AutoField(primary_key=True)
    menu_item = models.ForeignKey(
        'marketplace.MenuItem',
        on_delete=models.CASCADE,
        related_name='variations'
    )
    name = models.CharField(max_length=100)
    is_required = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'product_variations'
        ordering = ['menu_item', 'display_order', 'name']

    def __str__(self):
        return f"{self.menu_item.name} - {self.name}"


class VariationOption(models.Model):
    option_id = models.AutoField(primary_key=True)
    variation = models.ForeignKey(
        'marketplace.ProductVariation',
        on_delete=models.CASCADE,
        related_name='options'
    )
    name = models.CharField(max_length=100)
    # Signed: a smaller size may be cheaper than the base price
    price_modifier = models.DecimalField(max_digits=10, decimal_places=2, default=0.00)
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'variation_options'
        ordering = ['variation', 'display_order', 'name']

    def __str__(self):
        return f"{self.variation.name} - {self.name}"


class ProductAddOn(models.Model):
    """A multi-choice extras group on a menu item, e.g. Toppings."""
    add_on_id = models.AutoField(primary_key=True)
    menu_item = models.ForeignKey(
        'marketplace.MenuItem',
        on_delete=models.CASCADE,
        related_name='add_ons'
    )
    name = models.CharField(max_length=100)
    is_required = models.BooleanField(default=False)
    max_selection = models.IntegerField(default=1, validators=[MinValueValidator(1)])
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'product_add_ons'
        ordering = ['menu_item', 'display_order', 'name']

    def __str__(self):
        return f"{self.menu_item.name} - {self.name}"


class AddOnOption(models.Model):
    option_id = models.AutoField(primary_key=True)
    add_on = models.ForeignKey(
        'marketplace.ProductAddOn',
        on_delete=models.CASCADE,
        related_name='options'
    )
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0.00, validators=[MinValueValidator(0)])
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = 'add_on_options'
        ordering = ['add_on', 'display_order', 'name']

    def __str__(self):
        return f"{self.add_on.name} - {self.name}"
