"""Exception types shared by the engine and the front ends."""


class KlondikeError(Exception):
    """Base class for every error raised by the klondike package."""


class ContractViolation(KlondikeError):
    """A caller broke a documented precondition.

    These indicate a bug in the calling code (popping below the top of a
    tableau, pushing onto the stock, an impossible rank) and are never part
    of normal play.
    """


class InvariantViolation(KlondikeError):
    """The board no longer satisfies one of its structural invariants."""
