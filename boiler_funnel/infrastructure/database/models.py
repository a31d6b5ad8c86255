"""SQLAlchemy ORM models for form submissions and the product catalog"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FormSubmission(Base):
    """Qualification answers, contact details and checkout state for one lead"""

    __tablename__ = "form_submission"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Qualification answers
    fuel_type = Column(String(32), nullable=True)
    boiler_type = Column(String(32), nullable=True)
    property_type = Column(String(32), nullable=True)
    bedroom_count = Column(String(8), nullable=True)
    bathtub_count = Column(String(8), nullable=True)
    shower_cubicle_count = Column(String(8), nullable=True)
    flue_exit_type = Column(String(32), nullable=True)
    replacement_timing = Column(String(32), nullable=True)
    postcode = Column(Text, nullable=False, default="")
    address = Column(Text, nullable=False, default="")

    # Contact
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, index=True)
    phone = Column(Text, nullable=False)

    # Product, finance and booking steps
    selected_product = Column(JSON, nullable=True)
    finance_details = Column(JSON, nullable=True)
    install_date = Column(Date, nullable=True)
    date_surcharge = Column(Float, nullable=False, default=0.0)

    # Payment
    payment_status = Column(String(16), nullable=True)
    payment_intent_id = Column(Text, nullable=True)
    payment_amount = Column(Float, nullable=True)
    payment_date = Column(DateTime(timezone=True), nullable=True)

    submitted_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Product(Base):
    """Installation package offered on the product step"""

    __tablename__ = "product"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    brand = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Text, nullable=False)  # display string, e.g. "£2,340"
    original_price = Column(Text, nullable=True)
    rating = Column(Float, nullable=False)
    category = Column(String(16), nullable=False, index=True)
    warranty = Column(Text, nullable=False)
    features = Column(JSON, nullable=False, default=list)
    expert_opinion = Column(Text, nullable=False)
    monthly_payment = Column(Text, nullable=True)
    zero_apr = Column(Text, nullable=True)
    suitable_bedrooms = Column(JSON, nullable=False, default=list)
    boiler_type = Column(String(32), nullable=True)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
