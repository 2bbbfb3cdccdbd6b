from django.urls import path

from . import views

app_name = 'chef_admin'

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),
    path('applications/<uuid:application_id>/approve/', views.approve_application, name='approve_application'),
    path('applications/<uuid:application_id>/reject/', views.reject_application, name='reject_application'),
    path('applications/<uuid:application_id>/notes/', views.application_notes, name='application_notes'),
    path('chefs/<uuid:chef_id>/', views.chef_detail, name='chef_detail'),
    path('chefs/<uuid:chef_id>/cuisines/', views.chef_cuisines, name='chef_cuisines'),
    path('chefs/<uuid:chef_id>/status/', views.chef_status, name='chef_status'),
    path('chefs/<uuid:chef_id>/soft-delete/', views.soft_delete_chef, name='soft_delete_chef'),
    path('chefs/<uuid:chef_id>/photos/', views.add_chef_photo, name='add_chef_photo'),
    path('chefs/<uuid:chef_id>/photos/<int:photo_id>/', views.delete_chef_photo, name='delete_chef_photo'),
    path('reviews/<uuid:review_id>/publish/', views.publish_review, name='publish_review'),
    path('reviews/<uuid:review_id>/delete/', views.delete_review, name='delete_review'),
]
