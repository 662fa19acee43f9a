from __future__ import annotations

from typing import Callable

from django.http import HttpRequest, HttpResponse

from apps.assets.service import Assets


def get_assets(request: HttpRequest) -> Assets:
    """Per-request asset service; created lazily when the middleware is absent."""
    assets = getattr(request, "assets", None)
    if not isinstance(assets, Assets):
        assets = Assets()
        request.assets = assets
    return assets


class AssetsMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Registration tables live exactly as long as the request.
        request.assets = Assets()
        return self.get_response(request)
