"""The authenticated caller, as resolved by the upstream auth gateway."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    id: int
    is_admin: bool = False
