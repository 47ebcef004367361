import uuid

from sqlalchemy import Column, Integer, BigInteger, Numeric, Text, Boolean, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.sql import text as sql_text

from .base import Base, JSONType, utcnow


class RetirementPlan(Base):
    """
    Retirement planning lead: personal and savings details plus the
    requested advisor consultation.

    Status: pending|scheduled|in_progress|completed|cancelled
    """
    __tablename__ = 'retirement_plans'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    # Contact
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    address = Column(Text)
    city = Column(Text)
    state = Column(Text)
    zip = Column(Text)

    # Savings profile
    age = Column(Integer, nullable=False)
    retirement_age = Column(Integer, nullable=False)
    current_savings = Column(Numeric, nullable=False)
    monthly_contribution = Column(Numeric)
    employer_match = Column(Numeric)
    has_advisor = Column(Boolean, nullable=False, default=False)

    status = Column(Text, nullable=False, default='pending')
    appointment_date_time = Column(TIMESTAMP(timezone=True), nullable=False)
    appointment_confirmed = Column(Boolean, nullable=False, default=False)
    advisor_id = Column(Text)
    advisor_name = Column(Text)
    document_ids = Column(JSONType, nullable=False, default=list)
    recommendations = Column(JSONType)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    __table_args__ = (
        Index('idx_retirement_plans_user_id', 'user_id'),
    )


class RetirementDocument(Base):
    """Uploaded statement or document metadata; the file itself lives in S3."""
    __tablename__ = 'retirement_documents'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    # Display only - never used in storage keys
    file_name = Column(Text, nullable=False)
    file_type = Column(Text, nullable=False)
    file_size = Column(BigInteger, nullable=False)

    # Server-generated: retirement-documents/{user_id}/{uuid}{ext}
    storage_key = Column(Text, nullable=False, unique=True)
    file_url = Column(Text, nullable=False)

    upload_date = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class AdvisorAppointment(Base):
    """Booked advisor slot. A slot is taken while an appointment there is 'booked'."""
    __tablename__ = 'advisor_appointments'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    plan_id = Column(Uuid, ForeignKey('retirement_plans.id', ondelete='SET NULL'))

    date_time = Column(TIMESTAMP(timezone=True), nullable=False)
    confirmed = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default='booked')  # booked|cancelled

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        # At most one live booking per slot; cancelled rows don't count
        Index(
            'uq_advisor_appointments_booked_slot', 'date_time', unique=True,
            postgresql_where=sql_text("status = 'booked'"),
            sqlite_where=sql_text("status = 'booked'"),
        ),
    )
