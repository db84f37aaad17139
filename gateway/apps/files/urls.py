"""URL routes for files app."""

from django.urls import path

from gateway.apps.files import views

urlpatterns = [
    path('upload', views.upload, name='upload'),
    path('public-files', views.public_files, name='public-files'),
    path('private-files', views.private_files, name='private-files'),
    path('file', views.file_by_cid, name='file'),
    path('file/display', views.display_file, name='file-display'),
    path('file/img', views.public_image, name='file-img'),
    path('file/private/img', views.private_image, name='file-private-img'),
    path('file/lottie', views.lottie_file, name='file-lottie'),
    path('file/toggle-private', views.toggle_private, name='file-toggle-private'),
]
