"""Service-layer exceptions, mapped to HTTP status codes by the API layer."""


class RecordNotFoundError(LookupError):
    """An action (update/submit/approve/reject) targeted an unknown id. -> 404"""

    def __init__(self, entity, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class InvalidTransitionError(ValueError):
    """A review transition was refused under strict transitions. -> 409"""

    def __init__(self, action, current_status):
        self.action = action
        self.current_status = current_status
        super().__init__(f"Cannot {action} a record in status '{current_status}'")


class PaymentConfigurationError(RuntimeError):
    """Stripe keys are not configured."""
