from django import forms
from django.utils.translation import gettext_lazy as _

from .settings_store import MAX_DAYS_INACTIVE, MIN_DAYS_INACTIVE, sanitize_settings


class PurgeSettingsForm(forms.Form):
    days_inactive = forms.IntegerField(
        label=_("Days Inactive Before Purge"),
        help_text=_(
            "Number of days a subscriber account can be inactive (with no comments) "
            "before it is purged. Default: 30 days."
        ),
        widget=forms.NumberInput(attrs={
            'min': MIN_DAYS_INACTIVE,
            'max': MAX_DAYS_INACTIVE,
            'style': 'width: 100px;',
        }),
    )
    send_emails = forms.BooleanField(
        required=False,
        label=_("Send Email Notifications"),
        help_text=_("If enabled, users will receive an email explaining why their account was deleted."),
    )
    notify_admin = forms.BooleanField(
        required=False,
        label=_("Notify Admin on Purge"),
        help_text=_("If enabled, the site admin will receive detailed information about each purged account."),
    )

    def clean(self):
        cleaned = super().clean()
        if self.errors:
            return cleaned
        # out-of-range values are clamped, not rejected
        return sanitize_settings(cleaned)
