from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


def generate_anti_forgery_token():
    """Opaque per-account secret printed on the loyalty barcode."""
    return uuid.uuid4().hex


class MembershipLevel(models.TextChoices):
    BRONZE = 'bronze', 'Bronze'
    SILVER = 'silver', 'Silver'
    GOLD = 'gold', 'Gold'


class UserManager(BaseUserManager):
    """Manager for accounts keyed by the identity provider's subject."""

    def create_user(self, external_uid, password=None, **extra_fields):
        if not external_uid:
            raise ValueError('External UID is required')

        email = extra_fields.pop('email', '')
        if email:
            email = self.normalize_email(email)

        user = self.model(external_uid=external_uid, email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            # Credentials are verified by the identity provider
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, external_uid, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(external_uid, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Loyalty account, provisioned on first authenticated contact."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    external_uid = models.CharField(max_length=128, unique=True)

    # Barcode secret, bound 1:1 to the account
    anti_forgery_token = models.CharField(
        max_length=64,
        unique=True,
        default=generate_anti_forgery_token,
        editable=False,
    )

    # Profile
    email = models.EmailField(max_length=255, blank=True)
    display_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    membership_level = models.CharField(
        max_length=16,
        choices=MembershipLevel.choices,
        default=MembershipLevel.BRONZE,
    )
    is_member = models.BooleanField(default=False)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_visit = models.DateTimeField(default=timezone.now)
    last_login = models.DateTimeField(null=True, blank=True)

    # GDPR compliance
    gdpr_deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'external_uid'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'accounts'
        indexes = [
            models.Index(fields=['email'], name='accounts_email_idx'),
            models.Index(fields=['created_at'], name='accounts_created_idx'),
        ]

    def __str__(self):
        return self.email or self.external_uid

    def get_display_name(self):
        """Return display name or email prefix."""
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.split('@')[0]
        return self.external_uid

    def anonymize(self):
        """
        GDPR-compliant anonymization.

        Ledger entries stay attached to the account row; only personal
        data is removed and the account can no longer authenticate.
        """
        self.external_uid = f"deleted_{self.id}"
        self.email = ''
        self.display_name = "Deleted User"
        self.phone = ''
        self.is_active = False
        self.is_member = False
        self.gdpr_deleted_at = timezone.now()
        self.set_unusable_password()
        self.save()
