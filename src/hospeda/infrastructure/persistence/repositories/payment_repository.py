"""Repository for payment operations.

Adds provider-specific lookups on top of the generic repository.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.infrastructure.persistence.models import PaymentModel
from hospeda.infrastructure.persistence.repositories.base_repository import (
    SqlAlchemyRepository,
)


class PaymentRepository(SqlAlchemyRepository[PaymentModel]):
    """Repository for payment database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PaymentModel)

    async def find_by_provider_payment_id(self, provider_payment_id: str) -> PaymentModel | None:
        """Get a payment by the ID the provider assigned to it.

        Args:
            provider_payment_id: Provider payment ID.

        Returns:
            The payment if found, None otherwise.
        """
        result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.provider_payment_id == provider_payment_id)
        )
        return result.scalar_one_or_none()

    async def update_status(
        self,
        payment_id: str,
        status: str,
        provider_data: dict[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> PaymentModel | None:
        """Update a payment's status and stored provider payload.

        Args:
            payment_id: The payment ID.
            status: New status.
            provider_data: Provider payload to store, if any.
            actor_id: Actor performing the update.

        Returns:
            The updated payment, or None if it does not exist.
        """
        data: dict[str, Any] = {"status": status, "updated_by_id": actor_id}
        if provider_data is not None:
            data["provider_data"] = provider_data
        return await self.update(payment_id, data)
