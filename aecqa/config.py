"""Global configuration: file screening limits, storage defaults, constants."""

# Extensions accepted by the ingestion stage
ALLOWED_EXTENSIONS = (".ifc",)

# Largest model file accepted for validation (500 MiB)
MAX_FILE_SIZE_BYTES = 500 * 1024**2

# Model files are plain STEP text; undecodable bytes are replaced, never fatal
TEXT_ENCODING = "utf-8"

# Default location of the results store
DEFAULT_RESULTS_DB = ":memory:"

# Rules run sequentially unless a caller asks for a worker pool
DEFAULT_MAX_WORKERS = 1
