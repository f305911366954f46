from typing import Optional


class OrderValidationError(Exception):
    """Client input problem, raised before any side effect happens."""
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OrderWorkflowError(Exception):
    """A dependent service failed while running one step of an order saga."""
    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step


class StorageError(OrderWorkflowError):
    pass


class OrderStoreError(OrderWorkflowError):
    pass


class CheckoutError(OrderWorkflowError):
    def __init__(self, message: str, status_code: Optional[int] = None, step: Optional[str] = None):
        super().__init__(message, step=step)
        self.status_code = status_code
