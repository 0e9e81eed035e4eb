"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: Response envelope, pagination and camelCase base model
- books: Book requests, responses and stock statistics
- users: Registration, account management and password change
- auth: Login and session payloads
- roles: Roles and permissions
- borrows: Cart lines and borrow records
- admin: Activity log, maintenance, dashboard and uploads
"""

from .admin import (
    ActivityDescription,
    ActivityLogRead,
    DashboardCounts,
    MaintenanceStatus,
    SystemConfigRead,
    ToggleMaintenanceRequest,
    UploadFileResponse,
)
from .auth import AccountResponse, LoginRequest, LoginResponse, UserLogin
from .books import BookCreate, BookRead, BookStats, BookUpdate, BulkCreateResult
from .borrows import BookRef, BorrowerRead, BorrowRead, BorrowRequest, CartRead, ReturnBookRequest
from .common import CamelModel, Meta, ResultPaginate, ResultResponse, build_page, build_response
from .roles import (
    PermissionCreate,
    PermissionRead,
    PermissionRef,
    PermissionUpdate,
    RoleCreate,
    RoleRead,
    RoleUpdate,
)
from .users import (
    ChangePasswordRequest,
    RegisterRequest,
    RegisterResponse,
    RoleSummary,
    UserCreate,
    UserRead,
    UserUpdate,
)

__all__ = [
    "AccountResponse",
    "ActivityDescription",
    "ActivityLogRead",
    "BookCreate",
    "BookRead",
    "BookRef",
    "BookStats",
    "BookUpdate",
    "BorrowRead",
    "BorrowRequest",
    "BorrowerRead",
    "BulkCreateResult",
    "CamelModel",
    "CartRead",
    "ChangePasswordRequest",
    "DashboardCounts",
    "LoginRequest",
    "LoginResponse",
    "MaintenanceStatus",
    "Meta",
    "PermissionCreate",
    "PermissionRead",
    "PermissionRef",
    "PermissionUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "ResultPaginate",
    "ResultResponse",
    "ReturnBookRequest",
    "RoleCreate",
    "RoleRead",
    "RoleSummary",
    "RoleUpdate",
    "SystemConfigRead",
    "ToggleMaintenanceRequest",
    "UploadFileResponse",
    "UserCreate",
    "UserLogin",
    "UserRead",
    "UserUpdate",
    "build_page",
    "build_response",
]
