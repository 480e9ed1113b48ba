# catalog_pipeline/pipeline/extractor.py
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from cssselect import SelectorError
from lxml import etree, html

from .. import config
from ..exceptions import ExtractionFailure
from ..models import ProductRecord
from ..models.product_record import DEFAULT_NAME
from .normalizers import clean_text, normalize_price, rating_from_classes, resolve_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSelectorConfig:
    """CSS selectors used to find each field inside one product node."""
    name: Optional[str] = config.NAME_SELECTOR
    price: Optional[str] = config.PRICE_SELECTOR
    image: Optional[str] = config.IMAGE_SELECTOR
    description: Optional[str] = None
    availability: str = config.AVAILABILITY_SELECTOR

    @classmethod
    def from_settings(cls, web_settings: Mapping[str, Any]) -> "FieldSelectorConfig":
        """Builds the selector set from the `web_scraping` config section; missing keys keep the defaults."""
        return cls(
            name=web_settings.get("product_name_selector") or config.NAME_SELECTOR,
            price=web_settings.get("product_price_selector") or config.PRICE_SELECTOR,
            image=web_settings.get("product_image_selector") or config.IMAGE_SELECTOR,
            description=web_settings.get("product_description_selector") or None,
            availability=web_settings.get("product_availability_selector") or config.AVAILABILITY_SELECTOR,
        )


def parse_document(body: bytes) -> html.HtmlElement:
    """Parses raw page bytes into an lxml tree."""
    try:
        return html.document_fromstring(body)
    except (etree.ParserError, ValueError) as e:
        raise ExtractionFailure(f"Could not parse catalog document: {e}", {"operation": "parse_document"}) from e


def _first(node: html.HtmlElement, *selectors: Optional[str]) -> Optional[html.HtmlElement]:
    """Returns the first match of the first selector that matches anything."""
    for selector in selectors:
        if not selector:
            continue
        matches = node.cssselect(selector)
        if matches:
            return matches[0]
    return None


def _extract_one(node: html.HtmlElement, selectors: FieldSelectorConfig, base_url: str) -> ProductRecord:
    link_node = _first(node, selectors.name, config.NAME_FALLBACK_SELECTOR)
    if link_node is not None:
        name = link_node.get("title") or clean_text(link_node.text_content()) or DEFAULT_NAME
        url = resolve_url(base_url, link_node.get("href")) or base_url
    else:
        logger.debug("Product node has no title link, using default name.")
        name = DEFAULT_NAME
        url = base_url

    price_node = _first(node, selectors.price, config.PRICE_FALLBACK_SELECTOR)
    price = normalize_price(price_node.text_content().strip()) if price_node is not None else None

    availability_node = _first(node, selectors.availability)
    availability = clean_text(availability_node.text_content()) if availability_node is not None else None

    description = ""
    if selectors.description:
        description_node = _first(node, selectors.description)
        if description_node is not None:
            description = clean_text(description_node.text_content()) or ""

    image_node = _first(node, selectors.image, config.IMAGE_FALLBACK_SELECTOR)
    image_url = resolve_url(base_url, image_node.get("src")) if image_node is not None else None

    rating_node = _first(node, config.RATING_SELECTOR)
    rating = rating_from_classes(rating_node.get("class")) if rating_node is not None else None

    return ProductRecord(
        name=name,
        price=price,
        description=description,
        category=config.DEFAULT_CATEGORY,
        media_path=image_url or url or "",
        rating=rating,
        availability=availability,
        url=url,
    )


def extract_products(document_root: html.HtmlElement, selectors: FieldSelectorConfig, base_url: str) -> List[ProductRecord]:
    """
    Turns every product node of the document into a ProductRecord, in document order.
    Missing sub-elements only degrade their own field. A page without product
    nodes yields an empty list. Invalid selectors raise ExtractionFailure.
    """
    try:
        product_nodes = document_root.cssselect(config.PRODUCT_CONTAINER_SELECTOR)
        logger.debug("Found %d product nodes using '%s'.", len(product_nodes), config.PRODUCT_CONTAINER_SELECTOR)
        return [_extract_one(node, selectors, base_url) for node in product_nodes]
    except SelectorError as e:
        raise ExtractionFailure(f"Invalid CSS selector: {e}", {"operation": "extract_products"}) from e
