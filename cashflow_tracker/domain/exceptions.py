"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordNotFoundError(DomainException):
    """Requested income, expense or loan does not exist for this user"""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id
