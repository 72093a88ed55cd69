from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Report:
    filename: str
    content: str
    mime_type: str
