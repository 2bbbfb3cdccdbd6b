# custom_auth/models.py

from django.conf import settings
from django.db import models


ROLE_ADMIN = 'admin'
ROLE_CUSTOMER = 'customer'


class UserRole(models.Model):
    """The role claim checked before any back-office action."""
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_CUSTOMER, 'Customer'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='role')
    current_role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    def switch_to_admin(self):
        self.current_role = ROLE_ADMIN
        self.save(update_fields=['current_role'])

    def switch_to_customer(self):
        self.current_role = ROLE_CUSTOMER
        self.save(update_fields=['current_role'])

    @property
    def is_admin(self):
        return self.current_role == ROLE_ADMIN

    def __str__(self):
        return f'{self.user.username} - {self.current_role}'


def user_is_admin(user) -> bool:
    if not getattr(user, 'is_authenticated', False):
        return False
    try:
        return user.role.is_admin
    except UserRole.DoesNotExist:
        return False
