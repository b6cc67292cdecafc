from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Profile:
    """Employee -> tenant mapping (profiles table)."""

    user_id: str
    company_id: Optional[str]
    full_name: Optional[str] = None
