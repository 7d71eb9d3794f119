from __future__ import annotations

# gh API / release operations
GH_TIMEOUT_SECONDS = 60.0

# cargo publish builds the crate before uploading
CARGO_PUBLISH_TIMEOUT_SECONDS = 15 * 60.0

GIT_CLIFF_TIMEOUT_SECONDS = 2 * 60.0

# Idempotent gh read retry policy
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0
