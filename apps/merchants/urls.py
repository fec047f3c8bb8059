from django.urls import path
from . import views

app_name = 'merchants'

urlpatterns = [
    # GET  /api/merchants/                - List merchants
    # POST /api/merchants/                - Create merchant (staff)
    path('', views.merchant_list, name='merchant-list'),
    path('participated/', views.participated_merchants, name='participated'),

    # GET   /api/merchants/{id}/          - Merchant detail
    # PATCH /api/merchants/{id}/          - Update merchant (staff)
    path('<uuid:merchant_id>/', views.merchant_detail, name='merchant-detail'),
]
