"""Custom exceptions for the RetailX billing backend."""


class RetailError(Exception):
    """Base exception for all RetailX errors."""

    pass


class EmptyBillError(RetailError):
    """Raised when a payment is requested for a bill with nothing to pay."""

    def __init__(self):
        super().__init__("Please scan at least one item before proceeding.")


class InvalidContactNumberError(RetailError):
    """Raised when the receipt number is not a 10-digit mobile number."""

    def __init__(self, value: str):
        self.value = value
        super().__init__("Please enter a valid 10-digit mobile number for the receipt.")


class UnknownProductError(RetailError):
    """Raised when a scanned tag has no catalog entry."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"No item found with ID: {tag}")


class CatalogImportError(RetailError):
    """Raised when a catalog CSV cannot be mapped onto the configured columns."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Catalog import failed: {reason}")


class PaymentStateError(RetailError):
    """Raised when a payment transition is not allowed from the current state."""

    def __init__(self, state: str, action: str):
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} while payment is '{state}'")


class PaymentGatewayError(RetailError):
    """Raised when the payment gateway could not create an order."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransactionNotFoundError(RetailError):
    """Raised when a transaction id is not in the sales ledger."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")


class ReturnLookupError(RetailError):
    """Raised when no sold line item matches a return request."""

    def __init__(self, detail: str):
        super().__init__(detail)


class AlreadyReturnedError(RetailError):
    """Raised when a line item has already been marked as returned."""

    def __init__(self, transaction_id: str, line_item_id: int):
        self.transaction_id = transaction_id
        self.line_item_id = line_item_id
        super().__init__(
            f"Item {line_item_id} of transaction {transaction_id} has already been returned"
        )


class AccessDeniedError(RetailError):
    """Raised when an admin role may not open a section."""

    def __init__(self, role: str, section: str):
        self.role = role
        self.section = section
        super().__init__(f"Role '{role}' is not allowed to access '{section}'")


ERROR_STATUS_CODES = {
    EmptyBillError: 400,
    InvalidContactNumberError: 400,
    CatalogImportError: 400,
    UnknownProductError: 404,
    TransactionNotFoundError: 404,
    ReturnLookupError: 404,
    PaymentStateError: 409,
    AlreadyReturnedError: 409,
    PaymentGatewayError: 502,
    AccessDeniedError: 403,
}
