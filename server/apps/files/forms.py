"""Forms for files app.

Forms only parse request data. Names, durations and uploads are
validated by the logic layer, which raises InvalidInputError.
"""

from django import forms

_DURATION_CHOICES = (
    ('1d', '1 day'),
    ('7d', '7 days'),
    ('30d', '30 days'),
    ('365d', '1 year'),
)


class FolderForm(forms.Form):
    """Name of a new or renamed folder."""

    name = forms.CharField(max_length=255, required=False)
    parent_id = forms.CharField(required=False, widget=forms.HiddenInput)


class UploadForm(forms.Form):
    """Single file upload into an optional folder."""

    file = forms.FileField(required=False)
    folder_id = forms.CharField(required=False, widget=forms.HiddenInput)


class ShareLinkForm(forms.Form):
    """Lifetime of a new share link, like '7d'."""

    duration = forms.CharField(
        required=False,
        initial='7d',
        widget=forms.TextInput(attrs={'list': 'duration-presets'}),
    )

    presets = _DURATION_CHOICES
