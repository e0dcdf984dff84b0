"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.
"""

from django.contrib import admin
from django.urls import include, path

from server.apps.files import views as files_views

admin.autodiscover()

urlpatterns = [
    # Apps:
    path('accounts/', include('server.apps.accounts.urls')),
    path('', include('server.apps.files.urls')),

    # django-admin:
    path('admin/', admin.site.urls),

    # It is a good practice to have explicit index view:
    path('', files_views.home, name='index'),
]
