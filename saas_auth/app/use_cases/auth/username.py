"""Username derivation from an email address."""

from slugify import slugify

from saas_auth.app.repositories.user_repository import IUserRepository


def username_base(email: str) -> str:
    return slugify(email.split("@", 1)[0], lowercase=True) or "user"


async def generate_unique_username(users: IUserRepository, email: str) -> str:
    """
    First free candidate of base, base-1, base-2, ... for the email local-part.

    The lookup is not atomic; the unique index on username is the final guard.
    """
    base = username_base(email)
    candidate = base
    count = 1
    while await users.get_by_username(candidate) is not None:
        candidate = f"{base}-{count}"
        count += 1
    return candidate
