"""URL routes for catalog app."""

from django.urls import path

from gateway.apps.catalog import views

urlpatterns = [
    path('docs', views.doc_collection, name='docs'),
    path('doc', views.doc_detail, name='doc'),
    path('cid-themes', views.cid_themes, name='cid-themes'),
]
