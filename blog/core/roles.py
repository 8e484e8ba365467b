"""Account roles as a closed enumeration."""

import enum
from typing import assert_never


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


def parse_role(value: object) -> Role | None:
    """Return the Role for a raw claim or form value, or None if it is not one."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except (ValueError, TypeError):
        return None


def is_admin(role: Role) -> bool:
    match role:
        case Role.ADMIN:
            return True
        case Role.USER:
            return False
        case _:
            assert_never(role)


def can_modify_post(role: Role, actor_id: int, author_id: int) -> bool:
    """An actor may edit or delete a post iff they are an admin or its author."""
    match role:
        case Role.ADMIN:
            return True
        case Role.USER:
            return actor_id == author_id
        case _:
            assert_never(role)
