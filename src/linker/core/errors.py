class LinkerError(Exception):
    pass


class InvalidInputError(LinkerError):
    pass


class DataSourceError(LinkerError):
    pass


class RateLimitError(DataSourceError):
    pass


class FetchError(DataSourceError):
    def __init__(self, address: str, cause: Exception) -> None:
        self.address = address
        self.cause = cause
        super().__init__(f"fetch failed for address {address}: {cause}")
