"""
Service Dependencies.

Annotated FastAPI dependencies shared by the routers: the request scoped
database session, the repository bundle built on it, the signed-in user and
the service objects.
"""

from typing import Annotated, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from readcycle.core.database import get_session
from readcycle.core.database.entities import User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle, build_repositories

from .activity_log import ActivityLogService
from .auth import AuthService
from .books import BookService
from .borrows import BorrowService
from .dashboard import DashboardService
from .email import EmailService
from .files import FileService
from .maintenance import MaintenanceService
from .roles import PermissionService, RoleService
from .security import get_current_user, get_optional_user, require_admin
from .users import UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repositories(session: SessionDep) -> RepositoryBundle:
    return build_repositories(session)


RepositoriesDep = Annotated[RepositoryBundle, Depends(get_repositories)]

CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[User], Depends(get_optional_user)]
AdminDep = Annotated[User, Depends(require_admin)]


def get_page(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    size: int = Query(default=20, ge=1, le=100, description="Page size"),
    sort: Optional[str] = Query(default=None, description="Sort as 'field' or 'field,asc|desc'"),
) -> PageRequest:
    return PageRequest(page=page, size=size, sort=sort)


PageDep = Annotated[PageRequest, Depends(get_page)]


def get_email_service() -> EmailService:
    return EmailService()


EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]


def get_user_service(repos: RepositoriesDep, email: EmailServiceDep) -> UserService:
    return UserService(repos, ActivityLogService(repos), email)


def get_auth_service(repos: RepositoriesDep) -> AuthService:
    return AuthService(repos)


def get_book_service(repos: RepositoriesDep) -> BookService:
    return BookService(repos)


def get_borrow_service(repos: RepositoriesDep) -> BorrowService:
    return BorrowService(repos)


def get_role_service(repos: RepositoriesDep) -> RoleService:
    return RoleService(repos)


def get_permission_service(repos: RepositoriesDep) -> PermissionService:
    return PermissionService(repos)


def get_activity_log_service(repos: RepositoriesDep) -> ActivityLogService:
    return ActivityLogService(repos)


def get_maintenance_service(repos: RepositoriesDep) -> MaintenanceService:
    return MaintenanceService(repos)


def get_dashboard_service(repos: RepositoriesDep) -> DashboardService:
    return DashboardService(repos)


def get_file_service() -> FileService:
    return FileService()


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
BorrowServiceDep = Annotated[BorrowService, Depends(get_borrow_service)]
RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
PermissionServiceDep = Annotated[PermissionService, Depends(get_permission_service)]
ActivityLogServiceDep = Annotated[ActivityLogService, Depends(get_activity_log_service)]
MaintenanceServiceDep = Annotated[MaintenanceService, Depends(get_maintenance_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
