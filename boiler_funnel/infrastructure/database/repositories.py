"""Data access layer for submissions and products"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from boiler_funnel.infrastructure.database.models import FormSubmission, Product
from boiler_funnel.domain.session import FunnelSession


class SubmissionRepository:
    """Repository for form submissions"""

    def __init__(self, db: Session):
        self.db = db

    def create_submission(self, data: Dict[str, Any]) -> FormSubmission:
        """Persist a new submission"""
        submission = FormSubmission(**data)
        self.db.add(submission)
        self.db.flush()  # Get ID without committing
        return submission

    def list_submissions(self) -> List[FormSubmission]:
        """All submissions, newest first"""
        return (
            self.db.query(FormSubmission)
            .order_by(FormSubmission.created_at.desc())
            .all()
        )

    def get_submission(self, submission_id: uuid.UUID) -> Optional[FormSubmission]:
        return (
            self.db.query(FormSubmission)
            .filter(FormSubmission.id == submission_id)
            .first()
        )

    def update_submission(self, submission_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[FormSubmission]:
        """Apply field changes; None if the submission does not exist"""
        submission = self.get_submission(submission_id)
        if not submission:
            return None

        for field, value in changes.items():
            setattr(submission, field, value)
        self.db.flush()
        return submission

    def delete_submission(self, submission_id: uuid.UUID) -> bool:
        submission = self.get_submission(submission_id)
        if not submission:
            return False

        self.db.delete(submission)
        self.db.flush()
        return True

    def load_session(self, submission: FormSubmission) -> FunnelSession:
        """Read the funnel state stored on a submission"""
        return FunnelSession.from_dict(
            {
                "submission_id": str(submission.id),
                "selected_product": submission.selected_product,
                "finance_details": submission.finance_details,
                "install_date": submission.install_date.isoformat() if submission.install_date else None,
                "date_surcharge": submission.date_surcharge,
            }
        )

    def save_session(self, submission: FormSubmission, session: FunnelSession) -> FormSubmission:
        """Write funnel state back onto the submission"""
        data = session.to_dict()
        submission.selected_product = data["selected_product"]
        submission.finance_details = data["finance_details"]
        submission.install_date = session.install_date
        submission.date_surcharge = data["date_surcharge"]
        self.db.flush()
        return submission

    def mark_payment_completed(
        self,
        submission_id: uuid.UUID,
        payment_intent_id: str,
        amount: float,
        paid_at: datetime,
    ) -> Optional[FormSubmission]:
        """Record a confirmed card payment"""
        return self.update_submission(
            submission_id,
            {
                "payment_status": "completed",
                "payment_intent_id": payment_intent_id,
                "payment_amount": amount,
                "payment_date": paid_at,
            },
        )


class ProductRepository:
    """Repository for the product catalog"""

    def __init__(self, db: Session):
        self.db = db

    def create_product(self, data: Dict[str, Any]) -> Product:
        product = Product(**data)
        self.db.add(product)
        self.db.flush()
        return product

    def list_products(self) -> List[Product]:
        """All products, newest first"""
        return (
            self.db.query(Product)
            .order_by(Product.created_at.desc())
            .all()
        )

    def get_product(self, product_id: uuid.UUID) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .first()
        )

    def update_product(self, product_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[Product]:
        product = self.get_product(product_id)
        if not product:
            return None

        for field, value in changes.items():
            setattr(product, field, value)
        self.db.flush()
        return product

    def delete_product(self, product_id: uuid.UUID) -> bool:
        product = self.get_product(product_id)
        if not product:
            return False

        self.db.delete(product)
        self.db.flush()
        return True
