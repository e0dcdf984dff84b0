"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    # Folders
    path('folders/', views.folder_list, name='folder_list'),
    path('folders/create/', views.folder_create, name='folder_create'),
    path('folders/<int:folder_id>/edit/', views.folder_edit, name='folder_edit'),
    path(
        'folders/<int:folder_id>/delete/',
        views.folder_delete,
        name='folder_delete',
    ),
    path(
        'folders/<int:folder_id>/links/',
        views.folder_links,
        name='folder_links',
    ),

    # Files
    path('files/upload/', views.file_upload, name='file_upload'),
    path('files/<int:file_id>/', views.file_detail, name='file_detail'),
    path(
        'files/<int:file_id>/download/',
        views.file_download,
        name='file_download',
    ),
    path('files/<int:file_id>/delete/', views.file_delete, name='file_delete'),

    # Share links
    path(
        'share/<int:folder_id>/create/',
        views.share_create,
        name='share_create',
    ),
    path(
        'share/links/<int:link_id>/delete/',
        views.share_revoke,
        name='share_revoke',
    ),
    path('share/<str:token>/', views.share_view, name='share_view'),
]
