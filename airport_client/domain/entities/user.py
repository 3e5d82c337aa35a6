"""User profile domain entity."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class CustomerType(str, Enum):
    REGULAR = "REGULAR"
    FREQUENT_FLYER = "FREQUENT_FLYER"


class MembershipLevel(str, Enum):
    NONE = "NONE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


@dataclass
class Profile:
    """
    Domain entity representing the logged-in user's profile.

    The discount percentage is only meaningful for frequent flyers, but it
    is consumed as given: the service is the authority on its value.
    """

    id: int
    name: str
    email: str
    phone_number: Optional[str] = None
    customer_type: CustomerType = CustomerType.REGULAR
    membership_level: MembershipLevel = MembershipLevel.NONE
    miles_flown: int = 0
    discount_percent: int = 0

    def __post_init__(self):
        """Validate profile entity."""
        if not self.email:
            raise ValueError("email is required")
        if not isinstance(self.customer_type, CustomerType):
            self.customer_type = CustomerType(self.customer_type)
        if not isinstance(self.membership_level, MembershipLevel):
            self.membership_level = MembershipLevel(self.membership_level)
        if self.miles_flown < 0:
            raise ValueError("miles_flown must be non-negative")
        if not 0 <= self.discount_percent <= 100:
            raise ValueError("discount_percent must be between 0 and 100")

    def is_frequent_flyer(self) -> bool:
        return self.customer_type == CustomerType.FREQUENT_FLYER

    @property
    def discount_text(self) -> str:
        return f"{self.discount_percent}% off" if self.discount_percent > 0 else "No discount"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Build a profile from the service's JSON representation."""
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            email=data["email"],
            phone_number=data.get("phoneNumber"),
            customer_type=CustomerType(data.get("customerType") or CustomerType.REGULAR.value),
            membership_level=MembershipLevel(data.get("membershipLevel") or MembershipLevel.NONE.value),
            miles_flown=int(data.get("milesFlown") or 0),
            discount_percent=int(data.get("discountPercent") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "customerType": self.customer_type.value,
            "membershipLevel": self.membership_level.value,
            "milesFlown": self.miles_flown,
            "discountPercent": self.discount_percent,
        }
