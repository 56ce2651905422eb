# journey/models/urls.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple


@dataclass(frozen=True)
class CssEntry:
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class JsEntry:
    url: str
    root_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "rootID": self.root_id}


# Contents of journey-urls.json for one published version
@dataclass(frozen=True)
class PublicUrlManifest:
    """
    Public CDN urls for the css and js assets of a version.

    Entry order follows the asset manifest's iteration order and is not
    meaningful; compare with entry_set().
    """
    css_entries: Tuple[CssEntry, ...] = field(default_factory=tuple)
    js_entries: Tuple[JsEntry, ...] = field(default_factory=tuple)

    def entry_set(self) -> FrozenSet[Any]:
        return frozenset(self.css_entries) | frozenset(self.js_entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "css": [e.to_dict() for e in self.css_entries],
            "js": [e.to_dict() for e in self.js_entries],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


__all__ = ["CssEntry", "JsEntry", "PublicUrlManifest"]
