from enum import StrEnum


class EquityType(StrEnum):
    PURCHASED = "PURCHASED"
    GRANTED = "GRANTED"  # subject to vesting


class HoldingStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TransactionType(StrEnum):
    ISSUANCE = "issuance"
    TRANSFER = "transfer"
    BUYBACK = "buyback"


class ApprovalStatus(StrEnum):
    PENDING = "pending"
    EXECUTED = "executed"
    REJECTED = "rejected"


class VestingStatus(StrEnum):
    NOT_APPLICABLE = "not_applicable"
    VESTING = "vesting"
    FULLY_VESTED = "fully_vested"
