"""Product matching against the customer's qualification answers"""

from typing import Iterable, List, TypeVar

P = TypeVar("P")


def filter_products(
    products: Iterable[P],
    boiler_type: str | None = None,
    bedroom_count: str | None = None,
) -> List[P]:
    """
    Keep products suited to the requested boiler type and bedroom count.

    Products only need `boiler_type` and `suitable_bedrooms` attributes.
    Missing criteria do not filter; input order is preserved.
    """
    matches = []
    for product in products:
        if boiler_type and product.boiler_type != boiler_type:
            continue
        if bedroom_count and bedroom_count not in (product.suitable_bedrooms or []):
            continue
        matches.append(product)
    return matches
