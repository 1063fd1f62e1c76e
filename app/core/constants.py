"""Core constants: cache key prefixes, listing routes and listing bounds.

Single source of truth for cache key structure (DRY). Used by the cache
key builders, the listing service and the invalidation trigger.
"""

# Every cached HTTP read lives under this prefix: cache:<route>?<query>
CACHE_PREFIX_RESPONSE = "cache"

# Delimiter between prefix and route
CACHE_KEY_SEP = ":"

# Listing routes (relative to settings.api_prefix); also the invalidation scopes.
PRODUCTS_ROUTE = "/products"
PRODUCT_CATEGORIES_ROUTE = "/products/categories"
ORDERS_ROUTE = "/orders"
TOP_UNIVERSITIES_ROUTE = "/orders/top-universities"

# Listing bounds and defaults
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# OFFSET is a signed 64-bit integer in Postgres.
MAX_OFFSET = 2**63 - 1
DEFAULT_TOP_UNIVERSITIES = 5
MAX_TOP_UNIVERSITIES = 50
