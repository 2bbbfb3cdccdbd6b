"""
ASGI config for tastes_like_home project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/4.2/howto/deployment/asgi/
"""

# tastes_like_home/asgi.py
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tastes_like_home.settings')

from django.core.asgi import get_asgi_application

application = get_asgi_application()
