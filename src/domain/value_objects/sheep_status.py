from __future__ import annotations
from enum import Enum

class SheepStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CULLED = "CULLED"
    DECEASED = "DECEASED"
