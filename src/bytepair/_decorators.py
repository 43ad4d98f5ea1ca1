"""Decorators shared by the training entry points."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def log_training(func: Callable) -> Callable:
    """
    Log the outcome of a training call that returns ``(vocab, tokens)``.

    On success the learned vocabulary size, the length of the merged corpus
    and the elapsed time are logged at INFO. A failed call is logged with its
    elapsed time and the exception propagates unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            vocab, tokens = func(*args, **kwargs)
        except Exception:
            log.info(
                f"{func.__qualname__} failed after {time.perf_counter() - start:.2f} s"
            )
            raise
        elapsed = time.perf_counter() - start
        log.info(
            f"learned vocabulary of {vocab.size()} tokens, corpus merged to "
            f"{len(tokens)} tokens in {elapsed:.2f} s ({elapsed / 60:.2f} mins)"
        )
        return vocab, tokens

    return wrapper
