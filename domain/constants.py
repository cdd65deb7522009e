HIDDEN_PREFIX = "."

COLLISION_SEPARATOR = "_"

COPY_CHUNK_BYTES = 1024 * 1024

ERROR_KIND_ACCESS = "ACCESS"
ERROR_KIND_DIRECTORY_CREATION = "DIRECTORY_CREATION"
ERROR_KIND_COPY = "COPY"
ERROR_KIND_INVALID_INPUT = "INVALID_INPUT"

RUN_STATUS_ALL_SUCCEEDED = "ALL_SUCCEEDED"
RUN_STATUS_NOTHING_TO_COPY = "NOTHING_TO_COPY"
RUN_STATUS_PARTIAL = "PARTIAL"
RUN_STATUS_FATAL = "FATAL"

ERROR_POLICY = {"SKIP", "RETRY_THEN_SKIP"}

# Skip reasons reported by the finder
SKIP_HIDDEN = "hidden"
SKIP_SYMLINK = "symlink"
SKIP_NOT_REGULAR = "not_regular_file"
SKIP_EXTENSION = "extension_mismatch"
SKIP_STAT_ERROR = "os_stat_error"
SKIP_WALK_ERROR = "walk_error"
