"""Browse API helpers.

https://developer.ebay.com/api-docs/buy/browse/overview.html
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import Field

from ..models import (
    Amount,
    Image,
    ItemLocation,
    LocalizedAspect,
    MarketingPrice,
    Model,
    Seller,
    ShipToLocations,
)
from ..options import Opt, opt_buy_marketplace
from .base import ResourceBase, query_value

# Valid values for the "buyingOptions" item field.
BUYING_OPTION_AUCTION = "AUCTION"
BUYING_OPTION_FIXED_PRICE = "FIXED_PRICE"

# Valid values for the "compatibilityStatus" compatibility field.
COMPATIBILITY_COMPATIBLE = "COMPATIBLE"
COMPATIBILITY_NOT_COMPATIBLE = "NOT_COMPATIBLE"
COMPATIBILITY_UNDETERMINED = "UNDETERMINED"


class EstimatedAvailability(Model):
    delivery_options: list[str] = []
    availability_threshold_type: str = ""
    availability_threshold: int = 0
    estimated_availability_status: str = ""
    estimated_available_quantity: int = 0
    estimated_sold_quantity: int = 0


class ShipToLocationUsedForEstimate(Model):
    postal_code: str = ""
    country: str = ""


class ShippingOption(Model):
    shipping_service_code: str = ""
    trademark_symbol: str = ""
    shipping_carrier_code: str = ""
    type: str = ""
    shipping_cost: Amount = Field(default_factory=Amount)
    quantity_used_for_estimate: int = 0
    min_estimated_delivery_date: datetime | None = None
    max_estimated_delivery_date: datetime | None = None
    ship_to_location_used_for_estimate: ShipToLocationUsedForEstimate = Field(
        default_factory=ShipToLocationUsedForEstimate
    )
    additional_shipping_cost_per_unit: Amount = Field(default_factory=Amount)
    shipping_cost_type: str = ""


class ReturnPeriod(Model):
    value: int = 0
    unit: str = ""


class ReturnTerms(Model):
    returns_accepted: bool = False
    refund_method: str = ""
    return_method: str = ""
    return_shipping_cost_payer: str = ""
    return_period: ReturnPeriod = Field(default_factory=ReturnPeriod)
    return_instructions: str = ""
    restocking_fee_percentage: str = ""


class TaxRegion(Model):
    region_name: str = ""
    region_type: str = ""


class TaxJurisdiction(Model):
    region: TaxRegion = Field(default_factory=TaxRegion)
    tax_jurisdiction_id: str = ""


class Tax(Model):
    tax_jurisdiction: TaxJurisdiction = Field(default_factory=TaxJurisdiction)
    tax_type: str = ""
    tax_percentage: str = ""
    shipping_and_handling_taxed: bool = False
    included_in_price: bool = False


class RatingHistogram(Model):
    rating: str = ""
    count: int = 0


class ReviewRating(Model):
    review_count: int = 0
    average_rating: str = ""
    rating_histograms: list[RatingHistogram] = []


class Aspect(Model):
    localized_name: str = ""
    localized_values: list[str] = []


class AspectGroup(Model):
    localized_group_name: str = ""
    aspects: list[Aspect] = []


class ProductIdentity(Model):
    identifier_type: str = ""
    identifier_value: str = ""


class AdditionalProductIdentity(Model):
    product_identity: list[ProductIdentity] = []


class Product(Model):
    aspect_groups: list[AspectGroup] = []
    title: str = ""
    description: str = ""
    image: Image = Field(default_factory=Image)
    gtins: list[str] = []
    brand: str = ""
    mpns: list[str] = []
    additional_product_identities: list[AdditionalProductIdentity] = []


class CompactItem(Model):
    """The "COMPACT" fieldgroup of an item."""

    item_id: str = ""
    seller_item_revision: str = ""
    price: Amount = Field(default_factory=Amount)
    estimated_availabilities: list[EstimatedAvailability] = []
    top_rated_buying_experience: bool = False


class Item(Model):
    """An eBay item with the "PRODUCT" fieldgroup."""

    item_id: str = ""
    seller_item_revision: str = ""
    title: str = ""
    subtitle: str = ""
    short_description: str = ""
    price: Amount = Field(default_factory=Amount)
    category_path: str = ""
    condition: str = ""
    condition_id: str = ""
    item_location: ItemLocation = Field(default_factory=ItemLocation)
    image: Image = Field(default_factory=Image)
    additional_images: list[Image] = []
    marketing_price: MarketingPrice = Field(default_factory=MarketingPrice)
    color: str = ""
    brand: str = ""
    seller: Seller = Field(default_factory=Seller)
    gtin: str = ""
    mpn: str = ""
    epid: str = ""
    estimated_availabilities: list[EstimatedAvailability] = []
    shipping_options: list[ShippingOption] = []
    ship_to_locations: ShipToLocations = Field(default_factory=ShipToLocations)
    return_terms: ReturnTerms = Field(default_factory=ReturnTerms)
    taxes: list[Tax] = []
    localized_aspects: list[LocalizedAspect] = []
    quantity_limit_per_buyer: int = 0
    primary_product_review_rating: ReviewRating = Field(default_factory=ReviewRating)
    top_rated_buying_experience: bool = False
    buying_options: list[str] = []
    item_affiliate_web_url: str = ""
    item_web_url: str = ""
    description: str = ""
    product: Product = Field(default_factory=Product)
    enabled_for_guest_checkout: bool = False
    adult_only: bool = False
    category_id: str = ""
    # Auction fields, missing from the documented samples.
    item_end_date: datetime | None = None
    minimum_price_to_bid: Amount = Field(default_factory=Amount)
    current_bid_price: Amount = Field(default_factory=Amount)
    unique_bidder_count: int = 0

    def is_auction(self) -> bool:
        return BUYING_OPTION_AUCTION in self.buying_options


class PrimaryItemGroup(Model):
    item_group_id: str = ""
    item_group_type: str = ""
    item_group_href: str = ""
    item_group_title: str = ""
    item_group_image: Image = Field(default_factory=Image)
    item_group_additional_images: list[Image] = []


class GroupItem(Model):
    item_id: str = ""
    seller_item_revision: str = ""
    title: str = ""
    short_description: str = ""
    price: Amount = Field(default_factory=Amount)
    category_path: str = ""
    condition: str = ""
    condition_id: str = ""
    item_location: ItemLocation = Field(default_factory=ItemLocation)
    image: Image = Field(default_factory=Image)
    color: str = ""
    material: str = ""
    pattern: str = ""
    size_type: str = ""
    brand: str = ""
    item_end_date: datetime | None = None
    seller: Seller = Field(default_factory=Seller)
    estimated_availabilities: list[EstimatedAvailability] = []
    shipping_options: list[ShippingOption] = []
    ship_to_locations: ShipToLocations = Field(default_factory=ShipToLocations)
    return_terms: ReturnTerms = Field(default_factory=ReturnTerms)
    localized_aspects: list[LocalizedAspect] = []
    top_rated_buying_experience: bool = False
    buying_options: list[str] = []
    primary_item_group: PrimaryItemGroup = Field(default_factory=PrimaryItemGroup)
    enabled_for_guest_checkout: bool = False
    adult_only: bool = False
    category_id: str = ""


class CommonDescription(Model):
    description: str = ""
    item_ids: list[str] = []


class ItemsByGroup(Model):
    items: list[GroupItem] = []
    common_descriptions: list[CommonDescription] = []


class CompatibilityProperty(Model):
    name: str = ""
    value: str = ""


class CompatibilityPayload(Model):
    compatibility_properties: list[CompatibilityProperty] = []


class CompatibilityWarningParameter(Model):
    name: str = ""
    value: str = ""


class CompatibilityWarning(Model):
    category: str = ""
    domain: str = ""
    error_id: int = 0
    input_ref_ids: list[str] = []
    long_message: str = ""
    message: str = ""
    output_ref_ids: list[str] = []
    parameters: list[CompatibilityWarningParameter] = []
    subdomain: str = ""


class Compatibility(Model):
    compatibility_status: str = ""
    warnings: list[CompatibilityWarning] = []


class ShippingCostSummary(Model):
    shipping_cost_type: str = ""
    shipping_cost: Amount = Field(default_factory=Amount)


class Category(Model):
    category_id: str = ""


class ItemSummary(Model):
    item_id: str = ""
    title: str = ""
    image: Image = Field(default_factory=Image)
    price: Amount = Field(default_factory=Amount)
    item_href: str = ""
    seller: Seller = Field(default_factory=Seller)
    marketing_price: MarketingPrice = Field(default_factory=MarketingPrice)
    condition: str = ""
    condition_id: str = ""
    thumbnail_images: list[Image] = []
    shipping_options: list[ShippingCostSummary] = []
    buying_options: list[str] = []
    current_bid_price: Amount = Field(default_factory=Amount)
    epid: str = ""
    item_web_url: str = ""
    item_location: ItemLocation = Field(default_factory=ItemLocation)
    categories: list[Category] = []
    additional_images: list[Image] = []
    adult_only: bool = False


class Search(Model):
    """One page of search results."""

    href: str = ""
    total: int = 0
    next: str = ""
    limit: int = 0
    offset: int = 0
    item_summaries: list[ItemSummary] = []


class BrowseResource(ResourceBase):
    """Work with the Browse API."""

    BASE = "buy/browse/v1"

    def get_item_by_legacy_id(self, legacy_item_id: str, *opts: Opt) -> CompactItem:
        """Retrieve an item by its legacy id.

        The RESTful item id is available in ``item_id``:
        https://developer.ebay.com/api-docs/buy/static/api-browse.html#Legacy
        """
        path = f"{self.BASE}/item/get_item_by_legacy_id?legacy_item_id={query_value(legacy_item_id)}"
        return self._get(path, CompactItem, *opts)

    def get_compact_item(self, item_id: str, *opts: Opt) -> CompactItem:
        return self._get(f"{self.BASE}/item/{item_id}?fieldgroups=COMPACT", CompactItem, *opts)

    def get_item(self, item_id: str, *opts: Opt) -> Item:
        return self._get(f"{self.BASE}/item/{item_id}?fieldgroups=PRODUCT", Item, *opts)

    def get_items_by_group_id(self, group_id: str, *opts: Opt) -> ItemsByGroup:
        """Retrieve the individual items of an item group."""
        path = f"{self.BASE}/item/get_items_by_item_group?item_group_id={query_value(group_id)}"
        return self._get(path, ItemsByGroup, *opts)

    def check_compatibility(
        self,
        item_id: str,
        marketplace_id: str,
        properties: Sequence[CompatibilityProperty],
        *opts: Opt,
    ) -> Compatibility:
        """Check whether a product is compatible with the item."""
        payload = CompatibilityPayload(compatibility_properties=list(properties))
        return self._post(
            f"{self.BASE}/item/{item_id}/check_compatibility",
            payload,
            Compatibility,
            *opts,
            opt_buy_marketplace(marketplace_id),
        )

    def search(self, *opts: Opt) -> Search:
        """Search for items; use the ``opt_browse_search*`` options to filter."""
        return self._get(f"{self.BASE}/item_summary/search", Search, *opts)
