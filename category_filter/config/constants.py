"""
Constants shared by the filter endpoint, the caches and the widget.
"""

# Cache lifetimes (seconds)
FRAGMENT_CACHE_TTL_SECONDS = 300
TERMS_CACHE_TTL_SECONDS = 3600
EMPTY_TERMS_CACHE_TTL_SECONDS = 300

# Self-request
FETCH_TIMEOUT_SECONDS = 10
FILTER_REQUEST_HEADER = 'X-SCF-Filter-Request'

# Query parameters understood on content pages
CATEGORY_QUERY_PARAM = 'scf_cat'
TARGET_PAGE_QUERY_PARAM = 'scf_page_id'

# Endpoint
FILTER_ACTION = 'scf_get_blog_html'
NONCE_ACTION = 'scf_blog_filter'
NONCE_LIFETIME_SECONDS = 86400

# Single class-or-id selector, e.g. ".blog-wrap" or "#posts"
SELECTOR_PATTERN = r'[.#][A-Za-z0-9_-]+'

# Transient Store keys
CACHE_VERSION_KEY = 'scf_cache_version'
FRAGMENT_KEY_PREFIX = 'fragment'
TERMS_KEY_PREFIX = 'terms'

# Content mutation events that bump the cache version
CONTENT_MUTATION_EVENTS = (
    'Post Saved',
    'Post Deleted',
    'Term Created',
    'Term Edited',
    'Term Deleted',
)

# CloudWatch
METRICS_NAMESPACE = 'CategoryFilter'
