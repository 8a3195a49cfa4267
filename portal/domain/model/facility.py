"""Directory entries with free-text opening hours."""

from portal.domain.model.common import DomainModel
from portal.domain.value import KitchenId, MedicalCenterId


class Facility(DomainModel):
    """Common fields of every directory entry.

    ``timings`` is free text ("9 AM - 9 PM", "24/7", ...) and the only
    source of truth for opening hours.
    """

    name: str
    address: str
    timings: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def search_text(self) -> str:
        """Lower-cased text that free-text search matches against."""
        return " ".join([self.name, self.address]).lower()

    def category(self) -> str | None:
        """Category used by the type filter."""
        return None


class MedicalCenter(Facility):
    """Hospital, clinic or pharmacy."""

    id: MedicalCenterId
    type: str
    contact: str
    specialization: str | None = None

    def search_text(self) -> str:
        parts = [super().search_text(), self.type.lower()]
        if self.specialization:
            parts.append(self.specialization.lower())
        return " ".join(parts)

    def category(self) -> str | None:
        return self.type


class CommunityKitchen(Facility):
    """Community kitchen serving meals."""

    id: KitchenId
    location: str = ""
    contact_phone: str = ""
    description: str | None = None
    food_type: str | None = None
    is_free: bool = True

    def search_text(self) -> str:
        parts = [super().search_text(), self.location.lower()]
        if self.food_type:
            parts.append(self.food_type.lower())
        return " ".join(parts)

    def category(self) -> str | None:
        return self.food_type
