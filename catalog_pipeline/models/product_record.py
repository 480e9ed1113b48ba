# catalog_pipeline/models/product_record.py

import math
import random
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from faker import Faker

RATING_LABELS = ("One", "Two", "Three", "Four", "Five")
DEFAULT_NAME = "Unknown item"
DEFAULT_CATEGORY = "Uncategorized"

_faker = Faker()


@dataclass(frozen=True)
class ProductRecord:
    """
    One normalized catalog entry. Records are immutable: use `updated()` (or
    `Catalog.update()`, which logs the change) to get a record with new values.
    """
    name: str = DEFAULT_NAME
    price: Optional[float] = None
    description: str = ""
    category: str = DEFAULT_CATEGORY
    media_path: str = ""
    rating: Optional[str] = None
    availability: Optional[str] = None
    url: str = ""

    def __post_init__(self):
        if self.price is not None:
            price = float(self.price)
            if not math.isfinite(price) or price < 0:
                raise ValueError(f"price must be a non-negative finite number, got {self.price!r}")
            object.__setattr__(self, "price", price)
        if self.rating is not None and self.rating not in RATING_LABELS:
            raise ValueError(f"rating must be one of {RATING_LABELS}, got {self.rating!r}")

    @property
    def sort_price(self) -> float:
        return self.price if self.price is not None else 0.0

    # Natural ordering is by price; comparing with anything else is a TypeError.
    def __lt__(self, other):
        if not isinstance(other, ProductRecord):
            return NotImplemented
        return self.sort_price < other.sort_price

    def __le__(self, other):
        if not isinstance(other, ProductRecord):
            return NotImplemented
        return self.sort_price <= other.sort_price

    def __gt__(self, other):
        if not isinstance(other, ProductRecord):
            return NotImplemented
        return self.sort_price > other.sort_price

    def __ge__(self, other):
        if not isinstance(other, ProductRecord):
            return NotImplemented
        return self.sort_price >= other.sort_price

    def updated(self, **changes: Any) -> "ProductRecord":
        """Returns a copy with `changes` applied; every field is validated again."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def info(self) -> str:
        pairs = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"ProductRecord({pairs})"

    def __str__(self) -> str:
        return self.info()

    def __repr__(self) -> str:
        return f"<ProductRecord name={self.name!r}, price={self.price!r}, category={self.category!r}>"

    @classmethod
    def generate_fake(cls) -> "ProductRecord":
        """Builds a plausible random record, handy for demos and seeding tests."""
        return cls(
            name=_faker.catch_phrase(),
            price=round(random.uniform(5.0, 100.0), 2),
            description=_faker.sentence(),
            category=random.choice(["Fiction", "Poetry", "History", "Travel", "Science"]),
            media_path=f"products/books/{_faker.slug()}.jpeg",
            rating=random.choice(RATING_LABELS),
            availability=random.choice(["In stock", "Out of stock"]),
            url=_faker.url(),
        )
