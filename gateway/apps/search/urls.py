"""URL routes for search app."""

from django.urls import path

from gateway.apps.search import views

urlpatterns = [
    path(
        'search-public-files',
        views.search_public_files,
        name='search-public-files',
    ),
]
