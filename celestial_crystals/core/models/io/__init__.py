"""
I/O models for API requests and responses.

These schemas define the contract between the storefront API and its
clients. They are kept separate from the database entities so the API can
evolve independently.

Modules:
- analytics: Admin analytics overview
- blog_posts: Blog post CRUD and generation requests
- catalog: Crystal detail with live stock
- checkout: Discount validation, cart quotes and payment intents
- customers: Customer profile and admin customer models
- inventory: Stock overview, changes and audit logs
- orders: Order tracking, history and admin order models
- recommendations: Birth-date crystal recommendations
- reviews: Crystal reviews and rating summaries
- subscribers: Newsletter subscriptions and email campaigns
"""

from .analytics import AnalyticsOverview, TopProduct
from .blog_posts import (
    BlogGenerateRequest,
    BlogPostCreate,
    BlogPostList,
    BlogPostRead,
    BlogPostUpdate,
)
from .catalog import CrystalDetail
from .checkout import (
    DiscountValidateRequest,
    PaymentIntentRequest,
    PaymentIntentResponse,
    QuoteRequest,
    QuoteResponse,
)
from .common import Pagination, page_offset
from .customers import (
    CustomerList,
    CustomerRead,
    CustomerUpdate,
    ProfileRead,
    ProfileUpdate,
)
from .inventory import (
    BulkInventoryEntry,
    BulkInventoryItemResult,
    BulkInventoryRequest,
    BulkInventoryResult,
    CatalogSyncResult,
    InventoryChangeRequest,
    InventoryItemRead,
    InventoryLogRead,
    InventoryOverview,
    InventoryStats,
)
from .orders import (
    AdminOrderList,
    AdminOrderRead,
    OrderCancelRequest,
    OrderItemRead,
    OrderRead,
    OrderStatusHistoryRead,
    OrderStatusUpdate,
    OrderTrackingItem,
    OrderTrackingResponse,
    ReconcileResult,
)
from .recommendations import RecommendationRequest, RecommendationResponse
from .reviews import ReviewCreate, ReviewListResponse, ReviewRead, ReviewSummary
from .subscribers import (
    CampaignRequest,
    CampaignResult,
    EmailSubscribersOverview,
    RecentOrderRead,
    SubscribeRequest,
    SubscribeResponse,
    SubscriberRead,
    SubscriberStats,
    UnsubscribeRequest,
    UserSubscriberRead,
)

__all__ = [
    "AdminOrderList",
    "AdminOrderRead",
    "AnalyticsOverview",
    "BlogGenerateRequest",
    "BlogPostCreate",
    "BlogPostList",
    "BlogPostRead",
    "BlogPostUpdate",
    "BulkInventoryEntry",
    "BulkInventoryItemResult",
    "BulkInventoryRequest",
    "BulkInventoryResult",
    "CampaignRequest",
    "CampaignResult",
    "CatalogSyncResult",
    "CrystalDetail",
    "CustomerList",
    "CustomerRead",
    "CustomerUpdate",
    "DiscountValidateRequest",
    "EmailSubscribersOverview",
    "InventoryChangeRequest",
    "InventoryItemRead",
    "InventoryLogRead",
    "InventoryOverview",
    "InventoryStats",
    "OrderCancelRequest",
    "OrderItemRead",
    "OrderRead",
    "OrderStatusHistoryRead",
    "OrderStatusUpdate",
    "OrderTrackingItem",
    "OrderTrackingResponse",
    "Pagination",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "ProfileRead",
    "ProfileUpdate",
    "QuoteRequest",
    "QuoteResponse",
    "RecentOrderRead",
    "ReconcileResult",
    "RecommendationRequest",
    "RecommendationResponse",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewRead",
    "ReviewSummary",
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscriberRead",
    "SubscriberStats",
    "TopProduct",
    "UnsubscribeRequest",
    "UserSubscriberRead",
    "page_offset",
]
