class SlideDirectorError(Exception):
    """Base exception for the slide director."""

    pass


class DocumentError(SlideDirectorError):
    """Base exception for document store failures."""

    pass


class NoPresentationError(DocumentError):
    """No presentation is open in the document store."""

    pass


class SlideIndexError(DocumentError):
    """A slide index lies outside the open presentation."""

    def __init__(self, index: int, total: int) -> None:
        super().__init__(
            f"Slide index {index} is out of range (presentation has {total} slides)"
        )
        self.index = index
        self.total = total


class ApprovalError(SlideDirectorError):
    """An approval decision does not match the pending approval."""

    pass


class SessionBusyError(SlideDirectorError):
    """A run was started while another run or approval is outstanding."""

    pass


class IterationLimitError(SlideDirectorError):
    """The model kept requesting tools past the configured iteration cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Agent exceeded the iteration limit of {limit}")
        self.limit = limit


class ModelInvocationError(SlideDirectorError):
    """The chat model collaborator failed to produce a response."""

    pass


class RunCancelledError(SlideDirectorError):
    """Raised at a cancellation checkpoint to unwind the active run."""

    pass


class ConfigurationError(SlideDirectorError):
    """Settings are insufficient to reach the model provider."""

    pass
