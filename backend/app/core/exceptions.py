"""Exception hierarchy for the delayed jobs health service."""


class JobsHealthError(Exception):
    """Base exception for the delayed jobs health service."""


class StoreUnavailableError(JobsHealthError):
    """The job-queue store could not be reached or queried.

    Raised identically for the count and the oldest-job reads. There is no
    local recovery; the HTTP layer maps it to a 503 response.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Job queue store unavailable during {operation}: {message}")
