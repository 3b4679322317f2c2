"""Exception taxonomy for the assessment SDK.

Validation problems on the client path are *not* exceptions: they are
reported as ``ValidationIssue`` values and simply keep a step from
advancing.  Everything here is terminal for the current attempt but never
for the process; callers turn each error into a retry or a restart.

    AssessmentError
     ├── NotFoundError            unknown submission id (404)
     ├── TransportError           network / server failure
     │    └── InsightsError       insights fetch rejected
     ├── SubmissionInFlightError  duplicate submit on one session
     └── InvalidSubmissionError   server-side intake validation (400)
"""

from __future__ import annotations


class AssessmentError(Exception):
    """Base class for all SDK errors.

    ``message`` is safe to show to the user.  ``status_code`` is the HTTP
    status the server maps the error to.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AssessmentError):
    """The requested submission identifier does not exist."""

    status_code = 404

    def __init__(self, submission_id: str, message: str | None = None) -> None:
        super().__init__(
            message
            or (
                f'Submission ID "{submission_id}" not found in our records. '
                "Please check the ID and try again."
            )
        )
        self.submission_id = submission_id


class TransportError(AssessmentError):
    """A request failed in transit or the server answered with an error."""

    status_code = 502

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        # HTTP status returned by the upstream, None for network failures
        self.status = status


class InsightsError(TransportError):
    """The insights fetch was rejected; fails the whole report attempt."""


class SubmissionInFlightError(AssessmentError):
    """A submission for this session is already pending or has succeeded."""

    status_code = 409


class InvalidSubmissionError(AssessmentError):
    """Submitted details or answers failed server-side validation."""

    status_code = 400
