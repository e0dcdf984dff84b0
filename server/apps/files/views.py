"""Views for folders, files and share links.

Views stay thin: they call the logic layer and translate its errors.
NotFoundError and ForbiddenError become a flash message and a redirect
for logged-in users, or a 404 page for anonymous share viewers.
ExpiredError becomes a 410 page. InvalidInputError re-renders the form
(or flashes and redirects back when the form lives on another page).
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from server.apps.files.exceptions import (
    ExpiredError,
    ExternalStoreError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from server.apps.files.forms import FolderForm, ShareLinkForm, UploadForm
from server.apps.files.logic.access import get_owned_folder, resolve_principal
from server.apps.files.logic.file_operations import (
    delete_file,
    get_download_url,
    get_file,
    upload_file,
)
from server.apps.files.logic.folder_operations import (
    create_folder,
    delete_folder,
    list_folder,
    rename_folder,
)
from server.apps.files.logic.share_operations import (
    issue_link,
    list_links,
    parse_duration,
    resolve_link,
    revoke_link,
)

logger = logging.getLogger(__name__)


def folder_url(folder_id: int | None) -> str:
    """Build the listing URL of a folder, or of the root level."""
    url = reverse('files:folder_list')
    if folder_id:
        return f'{url}?folder={folder_id}'
    return url


def _redirect_to_folder(folder_id: int | None) -> HttpResponseRedirect:
    return redirect(folder_url(folder_id))


def _share_url(request: HttpRequest, token: str) -> str:
    return request.build_absolute_uri(
        reverse('files:share_view', args=[token]),
    )


@require_GET
def home(request: HttpRequest) -> HttpResponse:
    """Landing page, logged-in users go straight to their folders."""
    if resolve_principal(request) is not None:
        return redirect('files:folder_list')
    return render(request, 'index.html')


@login_required
@require_GET
def folder_list(request: HttpRequest) -> HttpResponse:
    """List the root level or the folder given by ``?folder=<id>``."""
    try:
        listing = list_folder(request.user, request.GET.get('folder'))
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    return render(request, 'folders/index.html', {
        'listing': listing,
        'folder_form': FolderForm(),
        'share_form': ShareLinkForm(),
    })


@login_required
@require_POST
def folder_create(request: HttpRequest) -> HttpResponse:
    """Create a folder at root level or inside ``parent_id``."""
    form = FolderForm(request.POST)
    form.is_valid()
    parent_id = form.cleaned_data.get('parent_id') or None

    try:
        create_folder(
            request.user,
            form.cleaned_data.get('name', ''),
            parent_id,
        )
    except InvalidInputError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(parent_id)
    except NotFoundError:
        messages.error(request, 'Parent folder not found')
        return _redirect_to_folder(None)

    messages.success(request, 'Folder created successfully')
    return _redirect_to_folder(parent_id)


@login_required
def folder_edit(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Show the rename form and rename the folder on POST."""
    try:
        folder = get_owned_folder(request.user, folder_id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    form = FolderForm(initial={'name': folder.name})
    if request.method == 'POST':
        form = FolderForm(request.POST)
        form.is_valid()
        try:
            folder = rename_folder(
                request.user,
                folder.id,
                form.cleaned_data.get('name', ''),
            )
        except InvalidInputError as error:
            form.add_error('name', str(error))
        except NotFoundError as error:
            messages.error(request, str(error))
            return _redirect_to_folder(None)
        else:
            messages.success(request, 'Folder updated successfully')
            return _redirect_to_folder(folder.parent_id)

    return render(request, 'folders/edit.html', {
        'folder': folder,
        'form': form,
    })


@login_required
@require_POST
def folder_delete(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Delete a folder with everything inside it."""
    try:
        folder = get_owned_folder(request.user, folder_id)
        parent_id = folder.parent_id
        delete_folder(request.user, folder.id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    messages.success(request, 'Folder deleted successfully')
    return _redirect_to_folder(parent_id)


@login_required
@require_GET
def folder_links(request: HttpRequest, folder_id: int) -> HttpResponse:
    """List the share links of a folder."""
    try:
        folder, links = list_links(request.user, folder_id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    return render(request, 'share/list.html', {
        'folder': folder,
        'links': [(link, _share_url(request, link.token)) for link in links],
    })


@login_required
def file_upload(request: HttpRequest) -> HttpResponse:
    """Show the upload form and store the file on POST."""
    form = UploadForm(initial={'folder_id': request.GET.get('folder', '')})
    folder_id = (
        request.POST.get('folder_id') or request.GET.get('folder') or None
    )

    current_folder = None
    if folder_id:
        try:
            current_folder = get_owned_folder(request.user, folder_id)
        except NotFoundError as error:
            messages.error(request, str(error))
            return _redirect_to_folder(None)

    if request.method == 'POST':
        form = UploadForm(request.POST, request.FILES)
        form.is_valid()
        uploaded = request.FILES.get('file')
        if uploaded is None:
            form.add_error('file', 'Please select a file to upload')
        else:
            try:
                upload_file(request.user, uploaded, folder_id)
            except InvalidInputError as error:
                form.add_error('file', str(error))
            except NotFoundError as error:
                messages.error(request, str(error))
                return _redirect_to_folder(None)
            except ExternalStoreError as error:
                messages.error(request, str(error))
                return redirect(request.get_full_path())
            else:
                messages.success(request, 'File uploaded successfully')
                return _redirect_to_folder(current_folder and current_folder.id)

    return render(request, 'files/upload.html', {
        'form': form,
        'current_folder': current_folder,
    })


@login_required
@require_GET
def file_detail(request: HttpRequest, file_id: int) -> HttpResponse:
    """Show file metadata."""
    try:
        file_instance = get_file(request.user, file_id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    return render(request, 'files/details.html', {'file': file_instance})


@login_required
@require_GET
def file_download(request: HttpRequest, file_id: int) -> HttpResponse:
    """Redirect to a signed URL that downloads the file."""
    try:
        download_url = get_download_url(request.user, file_id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    return redirect(download_url)


@login_required
@require_POST
def file_delete(request: HttpRequest, file_id: int) -> HttpResponse:
    """Delete a file and its stored object."""
    try:
        file_instance = delete_file(request.user, file_id)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    messages.success(request, 'File deleted successfully')
    return _redirect_to_folder(file_instance.folder_id)


@login_required
@require_POST
def share_create(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Issue a share link for a folder."""
    form = ShareLinkForm(request.POST)
    form.is_valid()

    try:
        folder = get_owned_folder(request.user, folder_id)
        duration_days = parse_duration(form.cleaned_data.get('duration'))
        link = issue_link(request.user, folder.id, duration_days)
    except NotFoundError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)
    except InvalidInputError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(folder.id)

    return render(request, 'share/created.html', {
        'folder': link.folder,
        'link': link,
        'share_url': _share_url(request, link.token),
    })


@login_required
@require_POST
def share_revoke(request: HttpRequest, link_id: int) -> HttpResponse:
    """Delete a share link of one of the user's folders."""
    try:
        link = revoke_link(request.user, link_id)
    except NotFoundError:
        messages.error(request, 'Share link not found')
        return _redirect_to_folder(None)
    except ForbiddenError as error:
        messages.error(request, str(error))
        return _redirect_to_folder(None)

    messages.success(request, 'Share link deleted successfully')
    return _redirect_to_folder(link.folder_id)


@require_GET
def share_view(request: HttpRequest, token: str) -> HttpResponse:
    """Public view of a shared folder, no login needed."""
    viewer_id = resolve_principal(request)
    try:
        shared = resolve_link(token)
    except NotFoundError:
        return render(
            request,
            'share/error.html',
            {'error': 'Shared link not found'},
            status=404,
        )
    except ExpiredError as error:
        return render(
            request,
            'share/error.html',
            {'error': str(error)},
            status=410,
        )

    logger.info(
        'Shared folder %d opened through link %d by %s',
        shared.folder.id,
        shared.link.id,
        viewer_id if viewer_id is not None else 'anonymous',
    )
    return render(request, 'share/view.html', {
        'folder': shared.folder,
        'files': shared.files,
        'expires_at': shared.link.expires_at,
    })
