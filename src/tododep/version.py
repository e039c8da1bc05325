VERSION = "0.1.0"

# Shape of the persisted document; bump when the task node fields change.
APP_SCHEMA_VERSION = "1.0.0"
