"""Account profile model and mobile number helpers."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional, Tuple

DEFAULT_COUNTRY_CODE = "+91"

# (country name, dialling code) pairs offered when editing a profile
COUNTRY_CODES: List[Tuple[str, str]] = [
    ("India", "+91"),
    ("United States", "+1"),
    ("United Kingdom", "+44"),
    ("Australia", "+61"),
    ("Canada", "+1"),
    ("Germany", "+49"),
    ("France", "+33"),
    ("Japan", "+81"),
    ("Brazil", "+55"),
]


@dataclass
class ShippingAddress:
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    def to_dict(self) -> dict:
        """Convert to the stored JSON shape (camelCase postalCode)."""
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ShippingAddress":
        """Build an address from its stored form; missing keys become empty."""
        if not data:
            return cls()
        return cls(
            street=data.get("street") or "",
            city=data.get("city") or "",
            state=data.get("state") or "",
            postal_code=data.get("postalCode") or "",
            country=data.get("country") or "",
        )


@dataclass
class Profile:
    """Represents a customer's account profile.

    Attributes:
        id: User ID issued by the auth provider.
        full_name: Display name.
        country_code: Dialling code of the mobile number, e.g. "+44".
        local_number: Mobile number without the dialling code.
        shipping_address: Nested shipping address.
        updated_at: When the profile was last saved.
    """

    id: str
    full_name: str = ""
    country_code: str = DEFAULT_COUNTRY_CODE
    local_number: str = ""
    shipping_address: ShippingAddress = field(default_factory=ShippingAddress)
    updated_at: Optional[datetime] = None

    @property
    def mobile_number(self) -> str:
        """The combined number as stored."""
        return format_mobile_number(self.country_code, self.local_number)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["shipping_address"] = self.shipping_address.to_dict()
        data["mobile_number"] = self.mobile_number
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


def parse_mobile_number(
    full_number: Optional[str], default_code: str = DEFAULT_COUNTRY_CODE
) -> Tuple[str, str]:
    """Split a stored mobile number into (country code, local number).

    The stored form is "<code> <local>". A number whose first token does not
    start with "+" is treated as a local number under the default code.

    Args:
        full_number: Stored number, possibly None or empty.
        default_code: Code used when the number carries none.

    Returns:
        Tuple of (country_code, local_number).
    """
    if not full_number:
        return default_code, ""

    parts = full_number.split(" ")
    if len(parts) > 1 and parts[0].startswith("+"):
        return parts[0], " ".join(parts[1:])

    return default_code, full_number


def format_mobile_number(country_code: str, local_number: str) -> str:
    """Combine a country code and local number into the stored form."""
    return f"{country_code} {local_number}"


def is_known_country_code(code: str) -> bool:
    return any(code == known for _, known in COUNTRY_CODES)
