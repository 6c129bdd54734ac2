"""Dashboard error taxonomy.

Only identity, role and persistence errors ever reach a caller of the
aggregator. Facet and activity errors are recorded and absorbed.
"""


class DashboardError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 400


class Unauthenticated(DashboardError):
    """Credential missing, invalid or expired."""

    status_code = 401


class IdentityUnavailable(DashboardError):
    """The identity resolver could not be reached or returned garbage."""


class UnknownRole(DashboardError):
    """Role has no registered RoleProfile."""

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


class PersistenceFailure(DashboardError):
    """The snapshot upsert failed; the snapshot was not stored."""


class SnapshotNotFound(Exception):
    """No snapshot has been stored for this user yet."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"No snapshot for user {user_id}")


class UpstreamError(Exception):
    """An upstream service call failed (transport, HTTP status or payload)."""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


class FacetUnavailable(Exception):
    """One facet could not be fetched. Wraps the underlying cause."""

    def __init__(self, facet: str, cause: BaseException):
        self.facet = facet
        self.cause = cause
        super().__init__(f"{facet} unavailable: {_describe(cause)}")


class ActivityUnavailable(Exception):
    """The recent-activity read failed. Wraps the underlying cause."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"recent activity unavailable: {_describe(cause)}")


def _describe(cause: BaseException) -> str:
    # TimeoutError has an empty message
    return str(cause) or type(cause).__name__
