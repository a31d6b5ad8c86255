"""Cross-step funnel state for one customer journey"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional

from boiler_funnel.domain.models import BookingSelection, FinanceQuote, SelectedProduct
from boiler_funnel.domain.pricing import parse_price


def finance_snapshot(quote: FinanceQuote) -> Dict[str, Any]:
    """Finance figures as stored alongside a submission"""
    return {
        "deposit_percentage": quote.deposit_percentage,
        "deposit_amount": quote.deposit_amount,
        "payment_option": {"months": quote.months, "apr": quote.apr},
        "monthly_payment": quote.monthly_payment,
        "total_payable": quote.total_payable,
        "interest_payable": quote.interest_payable,
    }


@dataclass(frozen=True)
class FunnelSession:
    """
    State carried between the product, finance, booking and checkout steps.

    Loaded from the submission record when a step starts and saved back when
    it ends. Steps never read or write storage directly; they derive a new
    session with the with_* methods.
    """

    submission_id: Optional[str] = None
    selected_product: Optional[SelectedProduct] = None
    finance_details: Optional[Dict[str, Any]] = None
    install_date: Optional[date] = None
    date_surcharge: float = 0.0

    def base_price(self) -> Optional[float]:
        """Cash price of the selected product; raises InvalidPriceError if malformed"""
        if self.selected_product is None:
            return None
        return parse_price(self.selected_product.price)

    def surcharge(self) -> float:
        """Surcharge of the confirmed install date, 0 before booking"""
        return self.date_surcharge if self.install_date else 0.0

    def checkout_total(self) -> Optional[float]:
        base = self.base_price()
        if base is None:
            return None
        return base + self.surcharge()

    def with_product(self, product: SelectedProduct) -> "FunnelSession":
        # Finance figures belong to the previous product's price
        return replace(self, selected_product=product, finance_details=None)

    def with_finance(self, quote: FinanceQuote) -> "FunnelSession":
        return replace(self, finance_details=finance_snapshot(quote))

    def with_booking(self, selection: BookingSelection) -> "FunnelSession":
        return replace(self, install_date=selection.install_date, date_surcharge=selection.surcharge)

    def to_dict(self) -> Dict[str, Any]:
        product = self.selected_product
        return {
            "submission_id": self.submission_id,
            "selected_product": (
                {"id": product.id, "name": product.name, "brand": product.brand, "price": product.price}
                if product
                else None
            ),
            "finance_details": self.finance_details,
            "install_date": self.install_date.isoformat() if self.install_date else None,
            "date_surcharge": self.date_surcharge,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunnelSession":
        product = data.get("selected_product")
        install_date = data.get("install_date")
        return cls(
            submission_id=data.get("submission_id"),
            selected_product=(
                SelectedProduct(
                    id=str(product.get("id") or ""),
                    name=product.get("name") or "",
                    brand=product.get("brand") or "",
                    price=product.get("price") or "",
                )
                if product
                else None
            ),
            finance_details=data.get("finance_details"),
            install_date=date.fromisoformat(install_date) if install_date else None,
            date_surcharge=float(data.get("date_surcharge") or 0.0),
        )
