"""Enumeration types for the vehicle resale domain."""

from enum import Enum


class VehicleStatus(str, Enum):
    IN_LOT = "IN_LOT"
    IN_SERVICE = "IN_SERVICE"
    READY_FOR_DISTRIBUTION = "READY_FOR_DISTRIBUTION"
    DISTRIBUTED = "DISTRIBUTED"
    SOLD = "SOLD"

    def can_transition_to(self, target: "VehicleStatus") -> bool:
        """Return True when ``target`` is this status or its single successor."""
        if target == self:
            return True
        return _NEXT_STATUS[self] == target

    @property
    def already_distributed(self) -> bool:
        """True once the vehicle has been handed to a partner."""
        return self in (VehicleStatus.DISTRIBUTED, VehicleStatus.SOLD)


# Forward-only, no skipping. SOLD is terminal.
_NEXT_STATUS: dict[VehicleStatus, VehicleStatus | None] = {
    VehicleStatus.IN_LOT: VehicleStatus.IN_SERVICE,
    VehicleStatus.IN_SERVICE: VehicleStatus.READY_FOR_DISTRIBUTION,
    VehicleStatus.READY_FOR_DISTRIBUTION: VehicleStatus.DISTRIBUTED,
    VehicleStatus.DISTRIBUTED: VehicleStatus.SOLD,
    VehicleStatus.SOLD: None,
}


class SupplierSource(str, Enum):
    INTERNET = "INTERNET"
    PERSONAL_CONTACT = "PERSONAL_CONTACT"
    AUCTION = "AUCTION"
    DEALERSHIP = "DEALERSHIP"
    PRIVATE_SELLER = "PRIVATE_SELLER"


class ServiceType(str, Enum):
    MECHANICAL = "MECHANICAL"
    PAINT = "PAINT"
    BODYWORK = "BODYWORK"
    ELECTRICAL = "ELECTRICAL"
    UPHOLSTERY = "UPHOLSTERY"
    WINDOWS = "WINDOWS"


class DocumentType(str, Enum):
    INVOICE = "INVOICE"
    RECEIPT = "RECEIPT"
    SERVICE_ORDER = "SERVICE_ORDER"
    OTHER = "OTHER"
