class ForkifyError(Exception):
    pass


class DataUnavailable(ForkifyError):
    """Nothing to show. Views fold this into their fallback message."""


class UpstreamFailure(ForkifyError):
    """The recipe API failed or answered with a non-ok status."""


class RequestTimeout(UpstreamFailure):
    pass


class ValidationFailure(ForkifyError):
    """Upload form content that cannot be turned into a recipe payload."""


class PersistenceFailure(ForkifyError):
    """The bookmarks blob could not be read back."""
