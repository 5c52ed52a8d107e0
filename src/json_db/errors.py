"""Exceptions raised by the table store."""


class JsonDbError(Exception):
    """Base class for table store errors."""


class FileReadError(JsonDbError):
    """A table file exists but cannot be read or decoded."""


class FileWriteError(JsonDbError):
    """Writing a table file failed."""


class NameCollisionError(JsonDbError):
    """The requested table name is already in use."""


class FileSystemError(JsonDbError):
    """A file system operation other than read/write failed."""
