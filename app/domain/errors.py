"""
Domain exceptions raised by services and adapters.
Routers translate these into HTTP responses.
"""


class DomainError(Exception):
    """Base class for all domain-level failures."""


class OfferingNotFoundError(DomainError):
    def __init__(self, offering_id: str) -> None:
        super().__init__(f"Offering not found: {offering_id}")
        self.offering_id = offering_id


class NotOwnerError(DomainError):
    """The caller does not own the offering it is trying to change."""

    def __init__(self, offering_id: str, user_id: str) -> None:
        super().__init__(f"User {user_id} does not own offering {offering_id}")
        self.offering_id = offering_id
        self.user_id = user_id


class DuplicateApplicationError(DomainError):
    """At most one application per (offering, applicant) pair."""

    def __init__(self, offering_id: str, applicant_id: str) -> None:
        super().__init__(
            f"Applicant {applicant_id} already applied to offering {offering_id}"
        )
        self.offering_id = offering_id
        self.applicant_id = applicant_id


class UserExistsError(DomainError):
    pass


class InvalidCredentialsError(DomainError):
    pass
