"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IOrderRepository,
    IProductRepository,
    IUniversityRepository,
    IUserRepository,
)
from app.application.interfaces.services import ICacheService

__all__ = [
    "ICacheService",
    "IOrderRepository",
    "IProductRepository",
    "IUniversityRepository",
    "IUserRepository",
]
