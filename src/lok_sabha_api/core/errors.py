"""Error types surfaced by the query layer."""


class StoreUnavailableError(RuntimeError):
    """The results store cannot be opened or queried.

    Retryable by the caller once the underlying problem (missing file,
    permissions, unreachable server) is fixed.
    """
