from django.urls import path

from crm import views

app_name = "crm"

urlpatterns = [
    path("<uuid:chef_id>/contact/", views.contact_chef, name="contact_chef"),
    path("<uuid:chef_id>/contact-click/", views.contact_click, name="contact_click"),
]
