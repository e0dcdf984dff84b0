"""Views for registration.

Login and logout use Django's built-in auth views.
"""

import logging

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render

from server.apps.accounts.forms import RegistrationForm

logger = logging.getLogger(__name__)


def register(request: HttpRequest) -> HttpResponse:
    """Show and handle the registration form.

    Authenticated users are sent straight to their folders.
    """
    if request.user.is_authenticated:
        return redirect('files:folder_list')

    form = RegistrationForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        user = form.save()
        logger.info('Registered user %s (ID: %d)', user.username, user.pk)
        messages.success(request, 'You are now registered and can log in')
        return redirect('accounts:login')

    return render(request, 'accounts/register.html', {'form': form})
