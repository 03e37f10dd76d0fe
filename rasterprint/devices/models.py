from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import InvalidInput

DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "printer_profiles.json"
DEFAULT_PROFILE = "58mm"


@dataclass(frozen=True)
class PrinterProfile:
    name: str
    dot_width: int
    paper_mm: int
    mode: int = 0
    baud_rate: int = 19200
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, name: str) -> bool:
        wanted = name.strip().lower()
        return wanted == self.name.lower() or wanted in (alias.lower() for alias in self.aliases)


class PrinterProfileRegistry:
    _cache: Dict[Path, "PrinterProfileRegistry"] = {}

    def __init__(self, profiles: Iterable[PrinterProfile]) -> None:
        self._profiles = list(profiles)

    @classmethod
    def load(cls, path: Path = DATA_PATH) -> "PrinterProfileRegistry":
        key = path.resolve()
        cached = cls._cache.get(key)
        if cached:
            return cached
        raw = json.loads(path.read_text(encoding="utf-8"))
        profiles = [PrinterProfile(**{**item, "aliases": tuple(item.get("aliases", ()))}) for item in raw]
        registry = cls(profiles)
        cls._cache[key] = registry
        return registry

    @property
    def profiles(self) -> List[PrinterProfile]:
        return list(self._profiles)

    def get(self, name: str) -> Optional[PrinterProfile]:
        for profile in self._profiles:
            if profile.matches(name):
                return profile
        return None

    def require(self, name: Optional[str]) -> PrinterProfile:
        profile = self.get(name or DEFAULT_PROFILE)
        if not profile:
            raise InvalidInput(f"Unknown printer profile '{name}' (see --list-profiles)")
        return profile
