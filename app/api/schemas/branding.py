from __future__ import annotations

from pydantic import BaseModel


class LogoResponse(BaseModel):
    logo: str
