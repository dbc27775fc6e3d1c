from __future__ import annotations


class StorageError(RuntimeError):
    """
    Base class for durable store failures.

    Any StorageError aborts the advance that hit it.
    """


class StorageReadFailure(StorageError):
    pass


class StorageWriteFailure(StorageError):
    pass
