"""
Back-office user management handlers.
"""
from typing import List

from accounts.application.commands.auth_commands import CreateUserCommand, DeleteUserCommand
from accounts.application.queries.user_queries import ListUsersQuery
from accounts.domain.user import User, validate_password
from accounts.ports.user_repository import UserRepository
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import StateConflictError, UserNotFoundError


class ListUsersHandler:
    """Handler for ListUsersQuery."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, query: ListUsersQuery) -> List[User]:
        return await self.user_repository.list_all()


class CreateUserHandler:
    """Handler for CreateUserCommand."""

    def __init__(self, user_repository: UserRepository, audit_log_repository: AuditLogRepository):
        self.user_repository = user_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: CreateUserCommand) -> User:
        """
        Create an approved staff user.

        Raises:
            DomainValidationError: If name, email or password is invalid
            DuplicateError: If the email is taken
        """
        password = validate_password(command.password)
        user = User.create(name=command.name, email=command.email, role=command.role)
        created = await self.user_repository.add(user, password)
        await self.audit.record(AuditAction.CREATE_USER, f"Created {created.email}", command.actor)
        return created


class DeleteUserHandler:
    """Handler for DeleteUserCommand."""

    def __init__(self, user_repository: UserRepository, audit_log_repository: AuditLogRepository):
        self.user_repository = user_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteUserCommand) -> None:
        """
        Raises:
            StateConflictError: If an admin tries to delete their own account
            UserNotFoundError: If the user does not exist
        """
        if command.actor and command.actor.user_id == command.user_id:
            raise StateConflictError("You cannot delete your own account", code="SELF_DELETE")
        if not await self.user_repository.delete(command.user_id):
            raise UserNotFoundError()
        await self.audit.record(AuditAction.DELETE_USER, f"Deleted {command.user_id}", command.actor)
