# column families of the backing store
CF_MESSAGES = "messages"
CF_LABELS = "labels"
CF_LABEL_INDEX = "label_index"
CF_COUNTERS = "counters"
CF_PURGE_QUEUE = "purge_queue"

# message row attribute prefixes
CN_LABEL_PREFIX = "l:"
CN_MARKER_PREFIX = "m:"

# counter column suffixes
CN_TOTAL_MESSAGES = "total"
CN_UNSEEN_MESSAGES = "unseen"
CN_TOTAL_BYTES = "bytes"

# max entries read or mutated per request by the drain loops
DEFAULT_WINDOW_SIZE = 500

DEFAULT_QUOTA_BYTES = 1024 * 1024 * 1024
DEFAULT_QUOTA_COUNT = 50000
DEFAULT_PURGE_AGE_DAYS = 30

# blob names ending with this suffix are reserved for compressed payloads
BLOB_COMPRESS_SUFFIX = ".dfl"
