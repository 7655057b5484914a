"""offer-authorization: grant, price and void provisional holds on offers.

Every authorize call opens a local action, places a hold with the remote
provider serving the offer and records the computed price; voiding cancels
the action locally first and then releases the hold.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import (
    InMemoryActionStore,
    InMemoryEventCatalog,
    InMemoryNumberPublisher,
    InMemoryProductCatalog,
    InMemoryTransactionStore,
)

# ── Authorization ───────────────────────────────────────────────
from .authorization import (
    ActionLifecycleManager,
    MoneyTransferSelection,
    MoneyTransferService,
    PaymentCardService,
    ProgramMembershipService,
    SeatReservationService,
)

# ── Configuration ───────────────────────────────────────────────
from .config import ProjectSettings, ProviderSettings, Settings, get_settings

# ── Domain ──────────────────────────────────────────────────────
from .domain import (
    AcceptedOffer,
    ActionStatus,
    AuthorizeAction,
    CompoundPriceSpecification,
    ObjectType,
    Offer,
    OfferSelection,
    ProviderIdentifier,
    TicketedSeat,
    Transaction,
    TransactionRef,
)
from .guard import TransactionGuard
from .instrumentation import HookRegistry, get_hook_registry, set_hook_registry

# ── Errors ──────────────────────────────────────────────────────
from .primitives.exceptions import (
    AlreadyInUseError,
    ArgumentError,
    ArgumentNullError,
    ForbiddenError,
    NotFoundError,
    OfferAuthorizationError,
    RateLimitExceededError,
    ServiceUnavailableError,
)
from .pricing import compute_amount
from .providers import ProviderDispatcher
from .validation import OfferValidator, SellerContext

__all__ = [
    "AcceptedOffer",
    "ActionLifecycleManager",
    "ActionStatus",
    "AlreadyInUseError",
    "ArgumentError",
    "ArgumentNullError",
    "AuthorizeAction",
    "CompoundPriceSpecification",
    "ForbiddenError",
    "HookRegistry",
    "InMemoryActionStore",
    "InMemoryEventCatalog",
    "InMemoryNumberPublisher",
    "InMemoryProductCatalog",
    "InMemoryTransactionStore",
    "MoneyTransferSelection",
    "MoneyTransferService",
    "NotFoundError",
    "ObjectType",
    "Offer",
    "OfferAuthorizationError",
    "OfferSelection",
    "OfferValidator",
    "PaymentCardService",
    "ProgramMembershipService",
    "ProjectSettings",
    "ProviderDispatcher",
    "ProviderIdentifier",
    "ProviderSettings",
    "RateLimitExceededError",
    "SeatReservationService",
    "SellerContext",
    "ServiceUnavailableError",
    "Settings",
    "TicketedSeat",
    "Transaction",
    "TransactionGuard",
    "TransactionRef",
    "compute_amount",
    "get_hook_registry",
    "get_settings",
    "set_hook_registry",
]
