# barcode_scanner/core/models.py
"""Data structures shared by the scan pipeline."""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

UNKNOWN_FORMAT = "UNKNOWN"


@dataclass(frozen=True)
class ScanEvent:
    """A single detection reported by the decode source.

    ``format`` and ``confidence`` are optional: a missing format is recorded
    as ``UNKNOWN`` and a missing confidence always passes the error gate.
    Confidence is an error score, lower is better.
    """
    code: str
    format: Optional[str] = None
    confidence: Optional[float] = None


@dataclass(frozen=True)
class ProductInfo:
    name: str
    price: str
    brand: str
    description: str


@dataclass(frozen=True)
class ScanRecord:
    """An accepted scan as stored in the history."""
    id: int
    code: str
    format: str
    timestamp: str
    product: Optional[ProductInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanRecord":
        """Build a record from its stored form; raises on malformed data."""
        product = data.get("product")
        if product is not None:
            product = ProductInfo(
                name=product["name"],
                price=product["price"],
                brand=product["brand"],
                description=product["description"],
            )
        return cls(
            id=int(data["id"]),
            code=str(data["code"]),
            format=str(data["format"]),
            timestamp=str(data["timestamp"]),
            product=product,
        )


@dataclass(frozen=True)
class ScanStats:
    total: int = 0
    today: int = 0
    found: int = 0
