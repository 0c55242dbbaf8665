"""
Mapping from auth entities to the public AccountView DTO.

Password accounts expose `email_verified`; Google accounts expose
`verified`. Secrets (hashes, one-shot tokens) never leave this layer.
"""

from visionchat.application.auth.dtos import AccountView
from visionchat.domain.auth.entities import AccountType, GoogleUser, User


def regular_account_view(user: User, include_verified: bool = True) -> AccountView:
    return AccountView(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        type=AccountType.REGULAR.value,
        created_at=user.created_at,
        email_verified=user.email_verified if include_verified else None,
    )


def google_account_view(user: GoogleUser) -> AccountView:
    return AccountView(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        type=AccountType.GOOGLE.value,
        created_at=user.created_at,
        verified=user.verified,
    )
