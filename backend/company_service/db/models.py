"""SQLAlchemy ORM models for the companies and products tables."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import false, func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Company(Base):
    """Company table - owned by exactly one user identity."""

    __tablename__ = "companies"
    __table_args__ = (Index("idx_companies_user", "userId"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Owning identity, immutable after creation
    user_id: Mapped[str] = mapped_column("userId", String(255), nullable=False)
    company_name: Mapped[str] = mapped_column("companyName", String(255), nullable=False)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    street_additional: Mapped[str | None] = mapped_column(
        "streetAdditional", String(255), nullable=True
    )
    postal_code: Mapped[str] = mapped_column("postalCode", String(20), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    iban: Mapped[str] = mapped_column(String(34), nullable=False)
    bic: Mapped[str] = mapped_column(String(11), nullable=False)
    registration_number: Mapped[str] = mapped_column(
        "registrationNumber", String(20), nullable=False
    )
    vat_payer: Mapped[bool] = mapped_column(
        "vatPayer", Boolean, default=False, server_default=false(), nullable=False
    )
    vat_id: Mapped[str | None] = mapped_column("vatId", String(20), nullable=True)
    additional_info: Mapped[str | None] = mapped_column("additionalInfo", Text, nullable=True)
    document_location: Mapped[str | None] = mapped_column(
        "documentLocation", String(255), nullable=True
    )
    reverse_charge: Mapped[bool] = mapped_column(
        "reverseCharge", Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships (no ORM-side cascade; the FK is NO ACTION)
    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="company", passive_deletes="all"
    )


class Product(Base):
    """Product table - ownership derived through the parent company."""

    __tablename__ = "products"
    __table_args__ = (Index("idx_products_company", "companyId"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        "companyId",
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="NO ACTION", onupdate="NO ACTION"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    measuring_unit: Mapped[str] = mapped_column("measuringUnit", String(255), nullable=False)
    ddv_percentage: Mapped[Decimal] = mapped_column("ddvPercentage", Numeric(5, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="products")
