from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


# Largest reward threshold a merchant can configure
MAX_REWARD_THRESHOLD = 10000


class Merchant(models.Model):
    """Participating business (restaurant) with its reward threshold."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic info
    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=300)
    phone_number = models.CharField(max_length=32, blank=True)
    website = models.URLField(blank=True)

    # Media and locations
    images = models.JSONField(default=list, blank=True)
    locations = models.JSONField(default=list, blank=True)
    opening_hours = models.JSONField(default=dict, blank=True)
    is_open = models.BooleanField(default=True)
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.0')), MaxValueValidator(Decimal('5.0'))]
    )

    # Points required for one free reward; locked once credits exist
    reward_threshold = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_REWARD_THRESHOLD)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'merchants'
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(reward_threshold__gte=1),
                name='merchant_reward_threshold_positive'
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def has_ledger_entries(self):
        return self.ledger_entries.exists()
