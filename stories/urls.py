"""URL configuration for the stories project."""
from django.conf import settings
from django.urls import path

from stories.views import DashboardView

urlpatterns = [
    path("", DashboardView.as_view(), name="dashboard"),
]

if settings.DEBUG:
    from django.contrib.staticfiles.urls import staticfiles_urlpatterns

    urlpatterns += staticfiles_urlpatterns()
