from __future__ import annotations

import logging

from django.apps import AppConfig

log = logging.getLogger("assets.apps")


class AssetsConfig(AppConfig):
    name = "apps.assets"
    verbose_name = "Build assets"

    def ready(self) -> None:
        from . import checks  # noqa: F401
        from . import conf

        log.info("AssetsConfig ready: build output at %s", conf.base_dir())
