class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a requested date range is reversed, unparseable or too long."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist upstream."""


class UnknownWorkerError(NotFoundError):
    def __init__(self, worker_id):
        super().__init__(f"Unknown worker: {worker_id}")
        self.worker_id = worker_id


class UnknownTeamError(NotFoundError):
    def __init__(self, team_id):
        super().__init__(f"Unknown team: {team_id}")
        self.team_id = team_id


class UnknownOrganizationError(NotFoundError):
    def __init__(self, organization_id):
        super().__init__(f"Unknown organization: {organization_id}")
        self.organization_id = organization_id


class UpstreamFetchError(DomainError):
    """Raised when a data-access collaborator fails. Never retried here."""
