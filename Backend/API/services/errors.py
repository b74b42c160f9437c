class FairnessError(Exception):
    pass


class InvalidInput(FairnessError, ValueError):
    pass


class OutOfRange(FairnessError, IndexError):
    """Board or paytable index out of bounds; upstream logic is broken."""
