"""Store-level exceptions. Not-found is a return value, never an exception."""


class StorageError(Exception):
    """The database rejected or failed a statement; message is the driver's."""


class UserExistsError(Exception):
    """Registration hit a username that is already taken."""

    def __init__(self, username: str):
        super().__init__("User already exists")
        self.username = username
