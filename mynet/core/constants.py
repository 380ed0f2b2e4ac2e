"""Core constants: cache key structure, resource families and HTTP method sets.

Single source of truth for cache key structure (DRY). Used by the
response cache middleware, key builders and invalidation rules.
"""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Family used for HTTP entries whose path matches no resource family
CACHE_FAMILY_DEFAULT = "http"
CACHE_KEY_KIND_HTTP = "http"

# Resource families: (family, path keywords). A path belongs to the first
# family with a keyword that is a substring of it.
CACHE_FAMILY_SEARCH = "search"
CACHE_FAMILY_USERS = "users"
CACHE_FAMILY_TENDERS = "tenders"
CACHE_FAMILY_OFFERS = "offers"
CACHE_FAMILY_PURCHASE_ORDERS = "purchase-orders"
CACHE_FAMILY_INVOICES = "invoices"
CACHE_FAMILY_MESSAGES = "messages"
CACHE_FAMILY_REVIEWS = "reviews"

# Families that writes invalidate, in declaration order.
WRITE_FAMILIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (CACHE_FAMILY_USERS, ("/users",)),
    (CACHE_FAMILY_TENDERS, ("/tenders",)),
    (CACHE_FAMILY_OFFERS, ("/offers",)),
    (CACHE_FAMILY_PURCHASE_ORDERS, ("/purchase-orders", "/po")),
    (CACHE_FAMILY_INVOICES, ("/invoices",)),
    (CACHE_FAMILY_MESSAGES, ("/messages",)),
    (CACHE_FAMILY_REVIEWS, ("/reviews",)),
)

# Families used to tag cache keys. Search comes first: search results embed
# tender data and are evicted together with tenders.
KEY_FAMILIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (CACHE_FAMILY_SEARCH, ("/search",)),
    *WRITE_FAMILIES,
)

# Extra families evicted when a family is written.
CASCADE_FAMILIES: dict[str, tuple[str, ...]] = {
    CACHE_FAMILY_TENDERS: (CACHE_FAMILY_SEARCH,),
}

# HTTP methods
WRITE_METHODS = frozenset({"POST", "PUT", "DELETE", "PATCH"})
INVALIDATING_METHODS = frozenset({"POST", "PUT", "DELETE"})

# Response cache headers
HEADER_X_CACHE = "X-Cache"
HEADER_X_CACHE_TTL = "X-Cache-TTL"
HEADER_CACHE_CONTROL = "Cache-Control"
CACHE_STATUS_HIT = "HIT"
CACHE_STATUS_MISS = "MISS"
