"""Factory functions for session-bound persistence objects.

These keep session management concerns in the infrastructure layer.
Application use cases depend only on domain protocols, not on these.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from repertoire.domain.repositories.interfaces import UnitOfWorkProtocol
from repertoire.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork


def get_unit_of_work(session: AsyncSession) -> UnitOfWorkProtocol:
    """Get unit of work for transaction boundary management."""
    return DatabaseUnitOfWork(session)
