"""Error taxonomy for the practice engine."""


class LingodrillError(Exception):
    """Base class for engine errors."""


class InsufficientVocabulary(LingodrillError):
    """The pool is smaller than a drill's minimum; no round is started."""

    def __init__(self, kind: str, required: int, available: int):
        self.kind = kind
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient vocabulary for {kind}: need at least {required} entries, have {available}"
        )


class DuplicateIdentity(LingodrillError):
    """Two entries share the same English identity."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Duplicate entry identity: {identity!r}")


class StaleCallback(LingodrillError):
    """A delayed callback fired after its round was superseded."""


class PersistenceUnavailable(LingodrillError):
    """The persistent store could not be read or written."""


class UnknownRound(LingodrillError, LookupError):
    """No live round is registered under this id."""

    def __init__(self, round_id: str):
        self.round_id = round_id
        super().__init__(f"Unknown round: {round_id}")
