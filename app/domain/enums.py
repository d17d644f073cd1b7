"""Enums shared across the domain layer."""

from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class SortField(str, Enum):
    DATE = "date"
    PAYMENT = "payment"
    HOURS = "hours"
    APPLICATIONS = "applications"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ResponseFormat(str, Enum):
    PAGE = "page"
    # bare JSON array, kept for older clients
    ARRAY = "array"
