# rentnest/core/actor.py
from dataclasses import dataclass

OWNER = "owner"
RENTER = "renter"
ROLES = (OWNER, RENTER)


@dataclass(frozen=True)
class Actor:
    """
    The user on whose behalf a service call runs.
    Resolved from the bearer token by the API layer and passed explicitly.
    """
    id: int
    role: str

    @property
    def is_owner(self) -> bool:
        return self.role == OWNER
