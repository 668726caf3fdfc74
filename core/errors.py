class CampfireError(Exception):
    """Base class for recoverable errors that are shown to the user."""


class NotFoundError(CampfireError):
    pass


class StoreError(CampfireError):
    pass


class InvalidMoveError(CampfireError):
    pass


class ValidationFailedError(CampfireError):
    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__('; '.join(problems))


class SendInProgressError(CampfireError):
    pass


class UserCancelled(Exception):
    """A file dialog was dismissed. Not an error; never reported as one."""
