from django.urls import path

from . import views

app_name = 'chefs'

urlpatterns = [
    path('', views.chef_list, name='chef_list'),
    path('<uuid:chef_id>/', views.chef_detail, name='chef_detail'),
]
