from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    # POST /api/ledger/credit/                 - Credit points from a barcode scan
    path('credit/', views.credit, name='credit'),

    # GET  /api/ledger/balances/               - Balances of current account
    # GET  /api/ledger/balances/{merchant_id}/ - Balance at one merchant
    path('balances/', views.balance_list, name='balance-list'),
    path('balances/<uuid:merchant_id>/', views.balance_detail, name='balance-detail'),

    # GET  /api/ledger/redemptions/            - Reward history
    path('redemptions/', views.redemption_list, name='redemption-list'),
]
