from django.contrib.auth.models import AbstractUser
from django.db import models
from django.core.validators import RegexValidator


class User(AbstractUser):
    USER_TYPE_CHOICES = (
        ('customer', 'Customer'),
        ('restaurant', 'Restaurant'),
        ('admin', 'Administrator'),
    )

    user_type = models.CharField(max_length=12, choices=USER_TYPE_CHOICES, default='customer')
    email = models.EmailField(unique=True, db_index=True)
    phone_number = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        validators=[RegexValidator(r'^\+?1?\d{9,15}$', 'Enter a valid phone number.')]
    )
    # Expo push token registered by the mobile app
    expo_push_token = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['user_type'], name='users_user_type_idx'),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_user_type_display()})"

    @property
    def is_admin(self):
        return self.user_type == 'admin' or self.is_superuser


class DeliveryAddress(models.Model):
    address_id = models.AutoField(primary_key=True)
    user = models.ForeignKey(
        'marketplace.User',
        on_delete=models.CASCADE,
        related_name='delivery_addresses'
    )
    label = models.CharField(max_length=50, default='Home')
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=20, blank=True, null=True)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'delivery_addresses'
        ordering = ['-is_default', '-created_at']

    def __str__(self):
        return f"{self.label}: {self.address}, {self.city}"
