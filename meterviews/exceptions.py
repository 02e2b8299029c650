class MVError(Exception): ...


class IngestError(MVError): ...


class EmptyDatasetError(IngestError): ...


class SourceFetchError(IngestError): ...


class CoordinatorError(MVError): ...


class DuplicateNameError(CoordinatorError): ...


class SeriesError(MVError): ...


def require(condition: bool, message: str, exc: type[MVError] = MVError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
