"""Lookup failures raised by the service layer."""


class RecordNotFoundError(LookupError):
    """A requested record does not exist in the loaded datasets."""


class UnknownGameError(RecordNotFoundError):
    pass


class UnknownSpeciesError(RecordNotFoundError):
    pass


class UnknownItemError(RecordNotFoundError):
    pass
