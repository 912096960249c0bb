from __future__ import annotations

from enum import Enum


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


class BodyMode(str, Enum):
    NONE = "none"  # nothing besides the path
    QUERY = "query"  # remaining fields as query string
    JSON = "json"  # remaining fields as JSON body


class Surface(str, Enum):
    TRADING = "trading"
    BROKER = "broker"
    ACCOUNT = "account"  # broker surface scoped to one sub-account
    MARKET_DATA = "market_data"


class Sort(str, Enum):
    ASC = "asc"
    DESC = "desc"


class AccountStatus(str, Enum):
    ONBOARDING = "ONBOARDING"
    SUBMITTED = "SUBMITTED"
    RESUBMITTED = "RESUBMITTED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    ACTION_REQUIRED = "ACTION_REQUIRED"
    EDITED = "EDITED"
    ACCOUNT_UPDATED = "ACCOUNT_UPDATED"
    APPROVAL_PENDING = "APPROVAL_PENDING"
    REAPPROVAL_PENDING = "REAPPROVAL_PENDING"
    SIGNED_UP = "SIGNED_UP"
    KYC_SUBMITTED = "KYC_SUBMITTED"
    LIMITED = "LIMITED"
    AML_REVIEW = "AML_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DISABLED = "DISABLED"
    DISABLE_PENDING = "DISABLE_PENDING"
    ACCOUNT_CLOSED = "ACCOUNT_CLOSED"
    PAPER_ONLY = "PAPER_ONLY"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AccountType(str, Enum):
    TRADING = "trading"
    CUSTODIAL = "custodial"
    DONOR_ADVISED = "donor_advised"


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderTif(str, Enum):
    DAY = "day"
    GTC = "gtc"  # good till canceled
    FOK = "fok"  # fill or kill
    IOC = "ioc"  # immediate or cancel
    OPG = "opg"  # opening auction only
    CLS = "cls"  # closing auction only


class OrderClass(str, Enum):
    SIMPLE = "simple"
    BRACKET = "bracket"
    OCO = "oco"  # one cancels other
    OTO = "oto"  # one triggers other


class OrderStatus(str, Enum):
    NEW = "new"
    REPLACED = "replaced"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    DONE_FOR_DAY = "done_for_day"
    CANCELED = "canceled"
    EXPIRED = "expired"
    ACCEPTED = "accepted"
    PENDING_NEW = "pending_new"
    ACCEPTED_FOR_BIDDING = "accepted_for_bidding"
    PENDING_CANCEL = "pending_cancel"
    PENDING_REPLACE = "pending_replace"
    STOPPED = "stopped"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    CALCULATED = "calculated"
    HELD = "held"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "OrderStatus":
        # Statuses added server-side must not break decoding.
        return cls.UNKNOWN

    def is_terminal(self) -> bool:
        """True when no further updates will occur for the order."""

        return self in (
            OrderStatus.REPLACED,
            OrderStatus.FILLED,
            OrderStatus.CANCELED,
            OrderStatus.EXPIRED,
            OrderStatus.REJECTED,
        )


class OrderQueryStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class PositionSide(str, Enum):
    LONG = "long"
    SHORT = "short"


class AssetClass(str, Enum):
    US_EQUITY = "us_equity"
    US_OPTION = "us_option"
    CRYPTO = "crypto"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class DateType(str, Enum):
    TRADING = "TRADING"
    SETTLEMENT = "SETTLEMENT"


class BankCodeType(str, Enum):
    ABA = "ABA"
    BIC = "BIC"


class BankRelationshipStatus(str, Enum):
    QUEUED = "QUEUED"
    SENT_TO_CLEARING = "SENT_TO_CLEARING"
    APPROVED = "APPROVED"
    CANCELED = "CANCELED"


class AchRelationshipStatus(str, Enum):
    QUEUED = "QUEUED"
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    CANCEL_REQUESTED = "CANCEL_REQUESTED"


class BankAccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"


class TransferType(str, Enum):
    ACH = "ach"
    WIRE = "wire"


class TransferDirection(str, Enum):
    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"


class TransferTiming(str, Enum):
    IMMEDIATE = "immediate"
    NEXT_DAY = "next_day"


class TransferStatus(str, Enum):
    QUEUED = "QUEUED"
    APPROVAL_PENDING = "APPROVAL_PENDING"
    PENDING = "PENDING"
    SENT_TO_CLEARING = "SENT_TO_CLEARING"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"
    APPROVED = "APPROVED"
    COMPLETE = "COMPLETE"
    RETURNED = "RETURNED"


class StockFeed(str, Enum):
    SIP = "sip"  # all US exchanges
    IEX = "iex"  # Investors Exchange only
    OTC = "otc"  # over-the-counter


class Adjustment(str, Enum):
    RAW = "raw"
    SPLIT = "split"
    DIVIDEND = "dividend"
    ALL = "all"
