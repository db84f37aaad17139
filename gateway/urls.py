"""Root URL configuration."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('gateway.apps.files.urls')),
    path('', include('gateway.apps.search.urls')),
    path('', include('gateway.apps.catalog.urls')),
]
