"""Core constants: search and autocomplete limits shared across layers."""

# Autocomplete: terms shorter than this are rejected without touching the store.
MIN_AUTOCOMPLETE_TERM_LENGTH = 2
# Autocomplete: requested max_results is clamped to [1, MAX_AUTOCOMPLETE_RESULTS].
MAX_AUTOCOMPLETE_RESULTS = 10
# Upper bound accepted on the wire before clamping.
MAX_AUTOCOMPLETE_REQUEST_RESULTS = 20

# Search paging bounds enforced by request schemas.
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Column length limits (mirrored by ORM models and seeding).
PASSAGE_CONTENT_MAX_LENGTH = 2000
PASSAGE_LOCATOR_MAX_LENGTH = 255
PASSAGE_TYPE_MAX_LENGTH = 100
PASSAGE_AUTHOR_MAX_LENGTH = 255
SECTION_NAME_MAX_LENGTH = 255
SECTION_DESCRIPTION_MAX_LENGTH = 1000

# Pipeline names (used in logs, span events and readiness output).
DATABASE_PIPELINE = "database"
HTTP_PIPELINE = "outbound-http"
