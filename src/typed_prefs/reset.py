"""Bulk removal of a known key set across several stores."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from typed_prefs.exceptions import ResetError, ResetFailure, StoreError
from typed_prefs.stores.base import Store

logger = logging.getLogger(__name__)


def clear_all(
    keys: Iterable[str],
    stores: Sequence[Store],
    *,
    continue_on_error: bool = False,
) -> None:
    """Delete every key from every store, whether or not the store holds it.

    The reset is not transactional.  By default the first ``StoreError``
    propagates and the remaining pairs are left untouched.  With
    ``continue_on_error=True`` every pair is attempted and the failures are
    raised together as a :class:`ResetError`.
    """
    failures: list[ResetFailure] = []
    removed = 0

    for key in keys:
        for store in stores:
            try:
                store.delete(key)
            except StoreError as exc:
                if not continue_on_error:
                    raise
                logger.warning(
                    "preference.reset_failed: %s@%s: %s", key, store.namespace or "<private>", exc
                )
                failures.append(ResetFailure(key=key, namespace=store.namespace, error=exc))
            else:
                removed += 1

    logger.info("preference.reset: removed=%d failed=%d", removed, len(failures))
    if failures:
        raise ResetError(failures)
