from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.shortcuts import redirect
from django.utils import timezone
from django.views.generic import TemplateView

from . import forms
from .accounts import get_days_until_purge
from .purge import get_inactive_subscribers
from .scheduler import purge_interval
from .settings_store import PurgeSettings, save_settings


class PurgeSettingsView(LoginRequiredMixin, UserPassesTestMixin, TemplateView):
    template_name = "subscriber_purge/settings.html"

    def test_func(self):
        return self.request.user.is_staff

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        config = PurgeSettings.load()

        ctx.setdefault('settings_form', forms.PurgeSettingsForm(initial={
            'days_inactive': config.days_inactive,
            'send_emails':   config.send_emails,
            'notify_admin':  config.notify_admin,
        }))

        # ─── users scheduled for purge ────────────────────────────────────────────
        now = timezone.now()
        upcoming = []
        for account in get_inactive_subscribers(config.days_inactive, 0):
            registered = account.registered_at
            upcoming.append({
                'login':      account.login,
                'email':      account.email,
                'registered': registered.strftime('%Y-%m-%d %H:%M') if registered else '',
                'days_until': get_days_until_purge(account, config.days_inactive, now=now),
            })

        ctx['upcoming_purges'] = upcoming
        ctx['interval_minutes'] = int(purge_interval().total_seconds() // 60)
        return ctx

    def post(self, request, *args, **kwargs):
        settings_form = forms.PurgeSettingsForm(request.POST)

        if not settings_form.is_valid():
            context = self.get_context_data(settings_form=settings_form, **kwargs)
            return self.render_to_response(context)

        if save_settings(settings_form.cleaned_data):
            messages.success(request, "Settings saved.")
        else:
            messages.error(request, "Settings could not be saved. Please try again.")
        return redirect('subscriber_purge:settings')
