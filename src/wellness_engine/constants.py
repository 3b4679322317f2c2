"""Assessment constants shared across the SDK.

These values are referenced by the engine, the HTTP client, and the
questionnaire store.  They mirror conventions encoded in
``definitions/questionnaire.yaml``.

Client-side endpoints and timeouts can be overridden via environment
variables so that deployments can point at a different backend without
code changes.
"""

import os

# Answer options ordered from least to most severe.  The index of an
# option is the number of points it contributes to a domain score.
ANSWER_OPTIONS: list[str] = [
    "Not at all",
    "Several days",
    "More than half the days",
    "Nearly every day",
]

# Points for the most severe option (used to compute a domain's max score).
MAX_POINTS_PER_QUESTION = len(ANSWER_OPTIONS) - 1

# Step 0 always collects user details; steps 1..N are visible sections.
DETAILS_STEP = 0

# --- HTTP client defaults ---
# Overridable via WELLNESS_API_BASE_URL / WELLNESS_HTTP_TIMEOUT env vars.
API_BASE_URL = os.getenv("WELLNESS_API_BASE_URL", "http://localhost:8080")
HTTP_TIMEOUT_SECONDS = float(os.getenv("WELLNESS_HTTP_TIMEOUT", "30"))

# Relative endpoint paths (the server mounts them under the same prefix).
SUBMIT_PATH = "/api/submit-assessment"
REPORT_ENDPOINT_PATH = "/api/report"
INSIGHTS_PATH = "/api/generate-insights"

# Page that renders a generated report; the submission id is appended as
# the ``submissionId`` query parameter.
REPORT_PATH = os.getenv("REPORT_PATH", "/")
