from django.urls import path
from . import views

app_name = 'subscriber_purge'
urlpatterns = [
    path('settings/', views.PurgeSettingsView.as_view(), name='settings'),
]
