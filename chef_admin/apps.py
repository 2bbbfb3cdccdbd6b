from django.apps import AppConfig


class ChefAdminConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'chef_admin'
