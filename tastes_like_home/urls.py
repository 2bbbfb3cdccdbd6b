"""
URL configuration for tastes_like_home project.

The public site talks to the JSON API under ``/api/``; the review verification
link is a plain GET that redirects back to the chef page.
"""
from django.contrib import admin
from django.urls import path, include
from django.http import HttpResponse
from django.conf.urls.static import static
from django.conf import settings


urlpatterns = [
    # Simple health check endpoint for load balancers and CI smoke tests
    path('healthz/', lambda request: HttpResponse('ok'), name='healthz'),
    path('django-admin/', admin.site.urls),
    path('api/', include('reviews.urls')),
    path('api/chefs/', include('chefs.urls')),
    path('api/chefs/', include('crm.urls')),
    path('api/apply/', include('applications.urls')),
    path('api/admin/', include('chef_admin.urls')),
]

# Serve media files in development only
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
