# label ids below this value are reserved for system labels
MAX_RESERVED_LABEL_ID = 20

# user label ids are drawn from [MAX_RESERVED_LABEL_ID, MAX_LABEL_ID)
MAX_LABEL_ID = 10000

MAX_LABEL_NAME_LENGTH = 250

MAX_NEW_LABEL_ID_ATTEMPTS = 200

NESTED_LABEL_SEPARATOR = "^"
