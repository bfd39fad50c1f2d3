"""
Admin Use Case DTOs (Data Transfer Objects)
"""

from typing import List

from pydantic import BaseModel

from saas_auth.app.use_cases.auth.dtos import AdminProfile


class UserListResponse(BaseModel):
    """One page of users"""

    items: List[AdminProfile]
    total: int
    page: int
    limit: int


class SuspendUsersResponse(BaseModel):
    """Response for suspend users use case"""

    suspended: List[str]


class ActivateUsersResponse(BaseModel):
    """Response for activate users use case"""

    activated: List[str]
