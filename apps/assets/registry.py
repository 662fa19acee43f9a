"""
In-process registry of scripts, styles and script modules for one request.

Mirrors the register/enqueue contract of classic CMS asset queues: a handle is
declared once (first registration wins), may carry side data, and is output
only when enqueued, after every dependency it declares.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

log = logging.getLogger("assets.registry")

# False => project default version, None => no version at all.
Version = Union[str, bool, None]


@dataclass
class Dependency:
    handle: str
    src: Union[str, bool, None]
    deps: List[str] = field(default_factory=list)
    ver: Version = False
    args: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)
    textdomain: Optional[str] = None


class Dependencies:
    def __init__(self) -> None:
        self.registered: Dict[str, Dependency] = {}
        self.queue: List[str] = []

    def add(
        self,
        handle: str,
        src: Union[str, bool, None],
        deps: Sequence[str] = (),
        ver: Version = False,
        args: Any = None,
    ) -> bool:
        if handle in self.registered:
            log.debug("Handle %r already registered, keeping first declaration", handle)
            return False
        self.registered[handle] = Dependency(
            handle=handle,
            src=src,
            deps=[str(d) for d in deps or ()],
            ver=ver,
            args=args,
        )
        return True

    def remove(self, handle: str) -> None:
        self.registered.pop(handle, None)
        self.dequeue(handle)

    def add_data(self, handle: str, key: str, value: Any) -> bool:
        dep = self.registered.get(handle)
        if dep is None:
            return False
        dep.extra[key] = value
        return True

    def get_data(self, handle: str, key: str) -> Any:
        dep = self.registered.get(handle)
        if dep is None:
            return None
        return dep.extra.get(key)

    def enqueue(self, handle: str) -> None:
        if handle not in self.queue:
            self.queue.append(handle)

    def dequeue(self, handle: str) -> None:
        if handle in self.queue:
            self.queue.remove(handle)

    def query(self, handle: str, status: str = "registered") -> Union[Dependency, bool, None]:
        if status == "registered":
            return self.registered.get(handle)
        if status == "enqueued":
            return handle in self.queue
        raise ValueError(f"Unknown status: {status!r}")

    def all_deps(self, handles: Optional[Iterable[str]] = None) -> List[str]:
        """Dependency-first ordering of `handles` (the queue by default)."""
        ordered: List[str] = []
        done: Set[str] = set()
        visiting: Set[str] = set()

        def visit(handle: str) -> None:
            if handle in done or handle in visiting:
                return
            dep = self.registered.get(handle)
            if dep is None:
                log.debug("Skipping unknown dependency %r", handle)
                return
            visiting.add(handle)
            for child in dep.deps:
                visit(child)
            visiting.discard(handle)
            done.add(handle)
            ordered.append(handle)

        for handle in self.queue if handles is None else handles:
            visit(handle)
        return ordered


class ScriptRegistry(Dependencies):
    def add_inline_script(self, handle: str, data: str, position: str = "after") -> bool:
        if position not in ("before", "after"):
            position = "after"
        if not data:
            return False
        existing = self.get_data(handle, position)
        scripts = list(existing) if isinstance(existing, list) else []
        scripts.append(data)
        return self.add_data(handle, position, scripts)

    def get_inline_script_data(self, handle: str, position: str = "after") -> str:
        scripts = self.get_data(handle, position)
        if not isinstance(scripts, list):
            return ""
        return "\n".join(scripts)

    def set_translations(self, handle: str, domain: str) -> bool:
        dep = self.registered.get(handle)
        if dep is None:
            return False
        dep.textdomain = domain
        return True


class StyleRegistry(Dependencies):
    pass


class ScriptModuleRegistry:
    def __init__(self) -> None:
        self.registered: Dict[str, Dependency] = {}
        self.queue: List[str] = []

    def register(self, module_id: str, src: str, deps: Sequence[str] = (), version: Version = False) -> bool:
        if module_id in self.registered:
            return False
        self.registered[module_id] = Dependency(handle=module_id, src=src, deps=list(deps or ()), ver=version)
        return True

    def enqueue(self, module_id: str) -> None:
        if module_id not in self.queue:
            self.queue.append(module_id)


class AssetRegistry:
    """Scripts, styles and modules known to the current request."""

    def __init__(self) -> None:
        self.scripts = ScriptRegistry()
        self.styles = StyleRegistry()
        self.modules = ScriptModuleRegistry()
