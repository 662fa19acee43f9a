from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from apps.assets import conf
from apps.assets.i18n import is_rtl, load_script_textdomain, print_translations
from apps.assets.metadata import AssetMetadata, resolve_metadata
from apps.assets.registry import AssetRegistry, Version

log = logging.getLogger("assets.service")


class Assets:
    """
    Registers build output (entry points and their chunks) with the request's
    asset registry, exactly once per handle.

    Versions and dependencies come from the manifests the build writes next to
    every entry point, never from hardcoded configuration.
    """

    def __init__(self, registry: Optional[AssetRegistry] = None) -> None:
        self.registry = registry or AssetRegistry()
        # handle -> result of the first registration attempt
        self.register_scripts: Dict[str, bool] = {}
        self.register_styles: Dict[str, bool] = {}

    # ------------- Paths -----------------

    def get_base_path(self, path: str = "") -> Path:
        return conf.base_dir() / path

    def get_base_url(self, path: str = "") -> str:
        return conf.base_url() + path

    def get_asset_metadata(self, handle: str) -> AssetMetadata:
        return resolve_metadata(handle, base_dir=self.get_base_path(conf.script_subdir()))

    # ------------- Scripts -----------------

    def register_script_asset(
        self,
        script_handle: str,
        script_dependencies: Sequence[str] = (),
        with_i18n: bool = True,
    ) -> None:
        if script_handle in self.register_scripts:
            return

        base_script_url = self.get_base_url(conf.script_subdir())
        in_footer = True

        asset = self.get_asset_metadata(script_handle)
        entry_version = asset.version

        # `asset.js` are preloaded chunks, `asset.chunks` dynamically imported ones.
        for chunk in asset.js:
            self.register_script(
                chunk,
                f"{base_script_url}{chunk}.js",
                [],
                entry_version,
                in_footer,
                with_i18n,
            )

        # Dynamically imported chunks must never become load-time dependencies.
        dependencies = [*asset.dependencies, *script_dependencies, *asset.js]

        self.register_script(
            script_handle,
            f"{base_script_url}{script_handle}.js",
            dependencies,
            entry_version,
            in_footer,
            with_i18n,
        )

        self.registry.scripts.add_data(script_handle, "chunks", list(asset.chunks))

        # Dynamic chunks are loaded by the entry point itself; they are only
        # registered so their translations can ride along with the entry.
        for dynamic_chunk in asset.chunks:
            self.register_script(
                dynamic_chunk,
                f"{base_script_url}{dynamic_chunk}.js",
                [],
                entry_version,
                in_footer,
                with_i18n,
            )

            if with_i18n:
                self.registry.scripts.add_inline_script(
                    script_handle, self._chunk_translations(dynamic_chunk)
                )

    def enqueue_script_asset(
        self,
        script_handle: str,
        script_dependencies: Sequence[str] = (),
        with_i18n: bool = True,
    ) -> None:
        self.register_script_asset(script_handle, script_dependencies, with_i18n)
        self.enqueue_script(script_handle)

    def register_script(
        self,
        script_handle: str,
        src: Union[str, bool, None],
        deps: Sequence[str] = (),
        ver: Version = False,
        in_footer: bool = False,
        with_i18n: bool = True,
    ) -> bool:
        """Table-guarded registration; returns the result of the first attempt."""
        if script_handle not in self.register_scripts:
            registered = self.registry.scripts.add(
                script_handle, src, list(deps), ver, {"in_footer": in_footer}
            )
            self.register_scripts[script_handle] = registered
            if not registered:
                log.debug("Script %r was already known to the registry", script_handle)

            if src and with_i18n:
                self.registry.scripts.set_translations(script_handle, conf.text_domain())

        return self.register_scripts[script_handle]

    def enqueue_script(
        self,
        script_handle: str,
        src: str = "",
        deps: Sequence[str] = (),
        ver: Version = False,
        in_footer: bool = False,
        with_i18n: bool = False,
    ) -> None:
        self.register_script(script_handle, src, deps, ver, in_footer, with_i18n)
        self.registry.scripts.enqueue(script_handle)

    def register_script_module(self, script_handle: str, src: str) -> bool:
        # The browser's module graph resolves chunks, so no chunk expansion here.
        asset = self.get_asset_metadata(script_handle)
        return self.registry.modules.register(
            script_handle,
            src,
            list(asset.dependencies),
            asset.version,
        )

    def enqueue_script_module(self, script_handle: str, src: str) -> None:
        self.register_script_module(script_handle, src)
        self.registry.modules.enqueue(script_handle)

    def _chunk_translations(self, chunk: str) -> str:
        dep = self.registry.scripts.query(chunk)
        if dep is None or not dep.textdomain:
            return ""
        return print_translations(chunk, dep.textdomain)

    # ------------- Styles -----------------

    def register_style_asset(self, style_handle: str, style_dependencies: Sequence[str] = ()) -> None:
        if style_handle in self.register_styles:
            return

        base_style_url = self.get_base_url(conf.style_subdir())
        base_style_path = self.get_base_path(conf.style_subdir())
        ext = "-rtl.css" if is_rtl() else ".css"

        asset = self.get_asset_metadata(style_handle)
        # Chunk filenames already carry a content hash: no `?ver=` for them.
        chunk_version = None
        for style_chunk in asset.css:
            self.register_style(
                style_chunk,
                f"{base_style_url}{style_chunk}.css",
                [],
                chunk_version,
            )
            self.registry.styles.add_data(style_chunk, "path", str(base_style_path / f"{style_chunk}{ext}"))

        dependencies = [*style_dependencies, *asset.css]

        self.register_style(
            style_handle,
            f"{base_style_url}{style_handle}.css",
            dependencies,
            asset.version,
        )

        self.registry.styles.add_data(style_handle, "rtl", "replace")
        self.registry.styles.add_data(style_handle, "path", str(base_style_path / f"{style_handle}{ext}"))

    def enqueue_style_asset(self, style_handle: str, style_dependencies: Sequence[str] = ()) -> None:
        self.register_style_asset(style_handle, style_dependencies)
        self.enqueue_style(style_handle)

    def register_style(
        self,
        style_handle: str,
        src: Union[str, bool, None],
        deps: Sequence[str] = (),
        ver: Version = False,
        media: str = "all",
    ) -> bool:
        if style_handle not in self.register_styles:
            registered = self.registry.styles.add(style_handle, src, list(deps), ver, media)
            self.register_styles[style_handle] = registered
            if not registered:
                log.debug("Style %r was already known to the registry", style_handle)

        return self.register_styles[style_handle]

    def enqueue_style(
        self,
        style_handle: str,
        src: str = "",
        deps: Sequence[str] = (),
        ver: Version = False,
        media: str = "all",
    ) -> None:
        self.register_style(style_handle, src, deps, ver, media)
        self.registry.styles.enqueue(style_handle)

    def remove_style_dependencies(self, style_handle: str, styles: Iterable[str]) -> None:
        dep = self.registry.styles.query(style_handle)
        if dep is None:
            return
        drop = set(styles)
        dep.deps = [d for d in dep.deps if d not in drop]

    # ------------- Translations -----------------

    def get_translations(self, script_handle: str) -> List[Any]:
        """
        Decoded translation payloads of a script and of all its dynamic chunks.

        The entry's own payload comes first, then one per chunk in manifest
        order. Absent payloads are dropped; so are payloads that are not valid
        JSON.
        """
        chunks = self.registry.scripts.get_data(script_handle, "chunks")
        if not isinstance(chunks, (list, tuple)):
            return []

        domain = conf.text_domain()
        payloads = [load_script_textdomain(script_handle, domain)]
        payloads.extend(load_script_textdomain(str(chunk), domain) for chunk in chunks)

        decoded: List[Any] = []
        for raw in payloads:
            if not raw:
                continue
            try:
                decoded.append(json.loads(raw))
            except (ValueError, RecursionError):
                log.warning("Skipping malformed translations for %r", script_handle, exc_info=True)
        return decoded
