from __future__ import annotations

from django.views.generic import TemplateView

from apps.assets.middleware import get_assets


class DashboardView(TemplateView):
    template_name = "stories/dashboard.html"
    script_handle = "dashboard"
    style_handle = "dashboard"

    def get(self, request, *args, **kwargs):
        assets = get_assets(request)
        assets.enqueue_style_asset(self.style_handle)
        assets.enqueue_script_asset(self.script_handle)
        return super().get(request, *args, **kwargs)
