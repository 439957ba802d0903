"""SQLAlchemy model for the payments table."""

from typing import Any

from sqlalchemy import JSON, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class PaymentModel(AuditMixin, Base):
    """A payment processed through an external provider.

    Attributes:
        user_id: Paying user.
        status: pending, approved, authorized, in_process, in_mediation,
            rejected, cancelled, refunded or charged_back.
        type: one_time or subscription.
        provider_payment_id: Payment ID assigned by the provider.
        provider_data: Last webhook payload received for the payment.
    """

    __tablename__ = "payments"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    plan_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="ARS")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="one_time")
    provider: Mapped[str] = mapped_column(String(30), nullable=False, default="mercado_pago")
    provider_payment_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
    )
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    provider_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    @property
    def owner_id(self) -> str:
        return self.user_id

    def __repr__(self) -> str:
        return f"<PaymentModel(id={self.id}, status={self.status})>"
