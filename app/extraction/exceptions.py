class TransactionParseError(Exception):
    """Raised when the model response is not a JSON array of transactions."""
