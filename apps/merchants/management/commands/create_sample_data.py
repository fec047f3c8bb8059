"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 staff account and 3 customer accounts
- 4 merchants with different reward thresholds
- A few credits per customer, applied through the ledger engine
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.ledger.services import LedgerEngine
from apps.merchants.models import Merchant


MERCHANTS = [
    {
        'name': 'Corner Espresso',
        'address': 'Main Street 1',
        'images': ['https://example.com/img/corner-espresso.jpg'],
        'description': 'Espresso bar with a tenth coffee free.',
        'reward_threshold': 10,
    },
    {
        'name': 'Bagel Bros',
        'address': 'Harbour Road 12',
        'images': ['https://example.com/img/bagel-bros.jpg'],
        'description': 'Fresh bagels every morning.',
        'reward_threshold': 8,
    },
    {
        'name': 'Noodle House',
        'address': 'Station Square 3',
        'images': ['https://example.com/img/noodle-house.jpg'],
        'reward_threshold': 5,
    },
    {
        'name': 'Green Bowl',
        'address': 'Park Lane 44',
        'images': ['https://example.com/img/green-bowl.jpg'],
        'reward_threshold': 12,
        'is_open': False,
    },
]


class Command(BaseCommand):
    help = 'Create sample accounts, merchants and credits'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating sample data...')

        customers = self.create_accounts()
        merchants = self.create_merchants()
        self.create_credits(customers, merchants)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Identity subjects (use as the "sub" claim of a bearer token):')
        for user in customers:
            self.stdout.write(f'  {user.external_uid}  barcode={user.anti_forgery_token}')

    def create_accounts(self):
        """Create staff and customer accounts."""
        self.stdout.write('  Creating accounts...')

        admin, _ = User.objects.get_or_create(
            external_uid='sample-admin',
            defaults={
                'email': 'admin@example.com',
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_unusable_password()
        admin.save()

        customers = []
        for uid, email, name in [
            ('sample-alice', 'alice@example.com', 'Alice'),
            ('sample-bob', 'bob@example.com', 'Bob'),
            ('sample-charlie', 'charlie@example.com', 'Charlie'),
        ]:
            user, _ = User.objects.get_or_create(
                external_uid=uid,
                defaults={'email': email, 'display_name': name}
            )
            customers.append(user)

        return customers

    def create_merchants(self):
        """Create merchants."""
        self.stdout.write('  Creating merchants...')

        merchants = []
        for data in MERCHANTS:
            data = dict(data)
            merchant, _ = Merchant.objects.get_or_create(
                name=data.pop('name'),
                defaults=data
            )
            merchants.append(merchant)
        return merchants

    def create_credits(self, customers, merchants):
        """Credit a few purchases through the ledger engine."""
        self.stdout.write('  Crediting points...')

        engine = LedgerEngine()
        rewards = 0
        for i, user in enumerate(customers):
            for j, merchant in enumerate(merchants[:3]):
                result = engine.credit(
                    account_id=user.id,
                    anti_forgery_token=user.anti_forgery_token,
                    merchant_id=merchant.id,
                    item_count=(i + 1) * (j + 2),
                )
                rewards += result.rewards_earned

        self.stdout.write(f'  {rewards} reward(s) earned along the way')
