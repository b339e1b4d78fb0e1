from django.db import models


class Mall(models.Model):
    mall_id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'malls'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.city})"


class Restaurant(models.Model):
    restaurant_id = models.AutoField(primary_key=True)
    owner = models.ForeignKey(
        'marketplace.User',
        on_delete=models.CASCADE,
        related_name='restaurants',
        limit_choices_to={'user_type': 'restaurant'}
    )
    mall = models.ForeignKey(
        'marketplace.Mall',
        on_delete=models.SET_NULL,
        related_name='restaurants',
        null=True,
        blank=True
    )
    name = models.CharField(max_length=255)
    main_category = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    banner = models.URLField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurants'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active'], name='restaurants_active_idx'),
        ]

    def __str__(self):
        return self.name
