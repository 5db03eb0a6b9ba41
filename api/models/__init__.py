from api.models.user import User
from api.models.brand import Brand, BrandContact, TeamInvitation

__all__ = [
    "User", "Brand", "BrandContact", "TeamInvitation",
]
