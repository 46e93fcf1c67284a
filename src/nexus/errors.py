"""Domain exceptions shared by the storage layer and the HTTP surface."""


class NexusError(Exception):
    """Base class for nexus domain errors."""


class NotFoundError(NexusError):
    """A record does not exist or belongs to another user."""

    def __init__(self, entity: str, record_id: str | None = None):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found")


class CheckinAlreadySubmittedError(NexusError):
    """The user already submitted a check-in for the current day."""

    def __init__(self) -> None:
        super().__init__("You have already submitted a check-in for today")
