"""Core constants: cache tags, cache key prefixes and shared literal values.

Cache tags are owned here per resource type; actions invalidate them and
cached queries register under them.
"""

# Cache tags (one per resource type; per-record tags come from record_tag)
TAG_PRODUCTS = "products"
TAG_CATEGORIES = "categories"
TAG_CATEGORY_COUNTS = "category-counts"
TAG_ORDERS = "orders"
TAG_USERS = "users"
TAG_SETTINGS = "settings"

# Cache key prefixes
CACHE_PREFIX_QUERY = "query"
CACHE_PREFIX_TAG = "tag"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Dashboard aggregates are refreshed at least this often (seconds)
DASHBOARD_CACHE_TTL = 300

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def record_tag(resource: str, record_id: str) -> str:
    """Per-record cache tag, e.g. record_tag('product', 'abc') -> 'product-abc'."""
    if not record_id or CACHE_KEY_SEP in record_id:
        raise ValueError(f"Invalid record id for cache tag: {record_id!r}")
    return f"{resource}-{record_id}"
