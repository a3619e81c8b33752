# barcode_scanner/core/catalog.py
"""Static product catalog used to annotate scans."""
import logging
from typing import Dict, Mapping, Optional

from barcode_scanner.core.models import ProductInfo

DEFAULT_PRODUCTS = {
    '0123456789012': ProductInfo(
        name='Organic Apple Juice',
        price='$4.99',
        brand="Nature's Best",
        description='100% organic apple juice, 1L bottle, no added sugars'
    ),
    '0123456789013': ProductInfo(
        name='Whole Wheat Bread',
        price='$3.49',
        brand="Baker's Choice",
        description='Fresh baked whole wheat bread, 20 slices, high fiber'
    ),
    '0987654321098': ProductInfo(
        name='Premium Coffee Beans',
        price='$12.99',
        brand='Mountain Roast',
        description='Single origin arabica beans, medium roast, 250g'
    ),
    '1234567890123': ProductInfo(
        name='Organic Pasta',
        price='$2.79',
        brand='Italian Delights',
        description='Organic durum wheat penne pasta, 500g package'
    ),
    '5901234123457': ProductInfo(
        name='Greek Yogurt',
        price='$6.49',
        brand='Pure Greek',
        description='0% fat Greek style yogurt, 500g container'
    ),
}


class ProductCatalog:
    def __init__(self, products: Optional[Mapping[str, ProductInfo]] = None):
        """Initialize the catalog with a copy of the given products."""
        self.logger = logging.getLogger(__name__)
        source = DEFAULT_PRODUCTS if products is None else products
        self._products: Dict[str, ProductInfo] = dict(source)
        self.logger.debug(f"Catalog loaded with {len(self._products)} products")

    def lookup(self, code: str) -> Optional[ProductInfo]:
        """Return the product for an exact code match, or None."""
        return self._products.get(code)

    def __len__(self):
        return len(self._products)

    def __contains__(self, code):
        return code in self._products
