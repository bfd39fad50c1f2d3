from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from saas_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: List[UUID]) -> List[User]:
        """Get all users whose ID is in user_ids"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        pass

    @abstractmethod
    async def get_by_google_id(self, google_id: str) -> Optional[User]:
        """Get user by federated Google identity"""
        pass

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> Tuple[List[User], int]:
        """Get one page of users (newest first) and the total count"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
