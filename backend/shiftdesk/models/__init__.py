from .enums import STATUS_TIMESTAMP_ATTRS, ShiftStatus
from .reference import ClientType, IdType
from .client import Client
from .staff_member import StaffMember
from .shift import Shift

__all__ = [
    "STATUS_TIMESTAMP_ATTRS",
    "ShiftStatus",
    "ClientType",
    "IdType",
    "Client",
    "StaffMember",
    "Shift",
]
