from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Current account
    path('auth/me/', views.get_current_user, name='current-user'),
    path('auth/me/barcode/', views.current_user_barcode, name='current-user-barcode'),

    # Administrative CRUD
    path('users/', views.user_list, name='user-list'),
    path('users/<uuid:user_id>/', views.user_detail, name='user-detail'),
]
