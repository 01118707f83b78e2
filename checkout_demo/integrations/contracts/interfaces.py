from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ResultCode(str, Enum):
    AUTHORISED = "Authorised"
    RECEIVED = "Received"
    PENDING = "Pending"
    REFUSED = "Refused"
    ERROR = "Error"
    CANCELLED = "Cancelled"
    REDIRECT_SHOPPER = "RedirectShopper"
    IDENTIFY_SHOPPER = "IdentifyShopper"
    CHALLENGE_SHOPPER = "ChallengeShopper"
    PRESENT_TO_SHOPPER = "PresentToShopper"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "ResultCode":
        """Map a provider result code onto the enum; anything unrecognised is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        raw = value.strip()
        for member in cls:
            if member.value.lower() == raw.lower():
                return member
        return cls.UNKNOWN


class NavigationTarget(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"
    ERROR = "error"

    @property
    def path(self) -> str:
        return f"/{self.value}"


class Channel(str, Enum):
    WEB = "Web"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class Amount:
    currency: str
    value: int                           # minor units

    def to_dict(self) -> Dict[str, Any]:
        return {"currency": self.currency, "value": self.value}


@dataclass
class LineItem:
    id: str
    description: str
    quantity: int
    amount_including_tax: int
    amount_excluding_tax: Optional[int] = None
    tax_amount: Optional[int] = None
    tax_percentage: Optional[int] = None   # basis points, 2100 == 21%

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "description": self.description,
            "quantity": self.quantity,
            "amountIncludingTax": self.amount_including_tax,
            "amountExcludingTax": self.amount_excluding_tax,
            "taxAmount": self.tax_amount,
            "taxPercentage": self.tax_percentage,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class CartItem:
    id: str
    description: str
    quantity: int
    unit_price: int

    @property
    def total(self) -> int:
        return self.quantity * self.unit_price

    def to_line_item(self) -> LineItem:
        return LineItem(
            id=self.id,
            description=self.description,
            quantity=self.quantity,
            amount_including_tax=self.unit_price,
        )


# Fixed basket shown on the cart page and itemised for open-invoice methods.
DEMO_CART: List[CartItem] = [
    CartItem(id="Item #1", description="Sunglasses", quantity=1, unit_price=5000),
    CartItem(id="Item #2", description="Headphones", quantity=1, unit_price=5000),
]


@dataclass
class PaymentSubmission:
    amount: Amount
    method_type: str
    payment_method: Dict[str, Any] = field(default_factory=dict)   # raw widget state
    country_code: str = ""
    shopper_locale: Optional[str] = None
    shopper_email: Optional[str] = None
    line_items: Optional[List[LineItem]] = None
    additional_data: Dict[str, str] = field(default_factory=dict)
    browser_info: Optional[Dict[str, Any]] = None
    origin: Optional[str] = None
    channel: Optional[Channel] = None
    reference: Optional[str] = None
    shopper_reference: Optional[str] = None
    return_url: Optional[str] = None
    merchant_account: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)            # widget fields passed through untouched

    def to_provider_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "amount": self.amount.to_dict(),
                "paymentMethod": self.payment_method or {"type": self.method_type},
                "countryCode": self.country_code or None,
                "shopperLocale": self.shopper_locale,
                "shopperEmail": self.shopper_email,
                "lineItems": [item.to_dict() for item in self.line_items] if self.line_items else None,
                "additionalData": dict(self.additional_data) or None,
                "browserInfo": self.browser_info,
                "origin": self.origin,
                "channel": self.channel.value if self.channel else None,
                "reference": self.reference,
                "shopperReference": self.shopper_reference,
                "returnUrl": self.return_url,
                "merchantAccount": self.merchant_account,
            }
        )
        return {k: v for k, v in payload.items() if v is not None}


# ---------------------------------------------------------------------------
# Client interface
# ---------------------------------------------------------------------------

class CheckoutApiClient(Protocol):
    """Operations the server needs from the payment provider's Checkout API."""

    async def payment_methods(self, request: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def payments(self, request: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def payments_details(self, request: Dict[str, Any]) -> Dict[str, Any]:
        ...
