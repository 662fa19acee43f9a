from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import urlencode

from django import template
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from apps.assets import conf
from apps.assets.i18n import is_rtl, print_translations
from apps.assets.middleware import get_assets
from apps.assets.registry import Version

register = template.Library()


def _assets_from(context):
    request = context.get("request")
    if request is None:
        return None
    return get_assets(request)


def _versioned(src: str, ver: Version) -> str:
    if ver is None:
        return src
    if ver is False or ver is True:
        ver = conf.fallback_version()
    sep = "&" if "?" in src else "?"
    return f"{src}{sep}{urlencode({'ver': ver})}"


def _inline(js: str) -> SafeString:
    # Keep a payload from closing the surrounding <script> early.
    return mark_safe(js.replace("</", "<\\/"))


def _rtl_src(src: str) -> str:
    if src.endswith(".css"):
        return f"{src[:-4]}-rtl.css"
    return src


@register.simple_tag(takes_context=True)
def asset_styles(context) -> str:
    assets = _assets_from(context)
    if assets is None:
        return ""
    styles = assets.registry.styles
    rtl = is_rtl()
    rows = []
    for handle in styles.all_deps():
        dep = styles.registered[handle]
        if not dep.src:
            continue
        src = str(dep.src)
        if rtl and dep.extra.get("rtl") == "replace":
            src = _rtl_src(src)
        rows.append((handle, _versioned(src, dep.ver), dep.args or "all"))
    return format_html_join(
        "\n", '<link rel="stylesheet" id="{}-css" href="{}" media="{}">', rows
    )


def _in_footer(dep) -> bool:
    return bool(isinstance(dep.args, dict) and dep.args.get("in_footer"))


def _script_group(scripts, group: Optional[str]) -> List[str]:
    ordered = scripts.all_deps()
    if group is None:
        return ordered
    # A head script pulls its dependencies into the head, footer flag or not.
    head = set(scripts.all_deps(
        [h for h in ordered if not _in_footer(scripts.registered[h])]
    ))
    if group == "head":
        return [h for h in ordered if h in head]
    return [h for h in ordered if h not in head]


@register.simple_tag(takes_context=True)
def asset_scripts(context, group: Optional[str] = None) -> str:
    """`{% asset_scripts "head" %}` in <head>, `{% asset_scripts "footer" %}` before </body>; no group prints all."""
    assets = _assets_from(context)
    if assets is None:
        return ""
    scripts = assets.registry.scripts
    out: List[str] = []
    for handle in _script_group(scripts, group):
        dep = scripts.registered[handle]
        if dep.textdomain:
            translations = print_translations(handle, dep.textdomain)
            if translations:
                out.append(format_html(
                    '<script id="{}-js-translations">\n{}\n</script>', handle, _inline(translations)
                ))
        before = scripts.get_inline_script_data(handle, "before")
        if before:
            out.append(format_html('<script id="{}-js-before">\n{}\n</script>', handle, _inline(before)))
        if dep.src:
            out.append(format_html(
                '<script src="{}" id="{}-js"></script>', _versioned(str(dep.src), dep.ver), handle
            ))
        after = scripts.get_inline_script_data(handle, "after")
        if after:
            out.append(format_html('<script id="{}-js-after">\n{}\n</script>', handle, _inline(after)))
    return mark_safe("\n".join(out))


@register.simple_tag(takes_context=True)
def asset_script_modules(context) -> str:
    assets = _assets_from(context)
    if assets is None:
        return ""
    modules = assets.registry.modules
    rows = [
        (_versioned(modules.registered[module_id].src, modules.registered[module_id].ver), module_id)
        for module_id in modules.queue
        if module_id in modules.registered
    ]
    return format_html_join("\n", '<script type="module" src="{}" id="{}-js-module"></script>', rows)


@register.simple_tag(takes_context=True)
def asset_translations(context, handle: str) -> List[Any]:
    """`{% asset_translations "editor" as data %}{{ data|json_script:"editor-i18n" }}`"""
    assets = _assets_from(context)
    if assets is None:
        return []
    return assets.get_translations(handle)
