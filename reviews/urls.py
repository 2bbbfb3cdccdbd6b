from django.urls import path

from . import views

app_name = 'reviews'

urlpatterns = [
    path('verify-review', views.verify_review, name='verify_review'),
    path('chefs/<uuid:chef_id>/reviews/', views.submit_chef_review, name='submit_chef_review'),
]
