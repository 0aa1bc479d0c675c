# app/domain/identity.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    user_id: int
    is_admin: bool = False
