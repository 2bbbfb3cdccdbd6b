from django.urls import path

from . import views

app_name = 'applications'

urlpatterns = [
    path('', views.submit_chef_application, name='submit'),
    path('questions/', views.application_questions, name='questions'),
    path('uploads/', views.upload_application_file, name='upload'),
]
