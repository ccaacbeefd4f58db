"""
URL configuration for staytrack project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

# Import admin customization (just to apply it, not to use)
from staytrack import admin as admin_customization  # noqa: F401

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),  # API routes
    path('dashboard/', include('dashboard.urls')),  # Dashboard API routes
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
