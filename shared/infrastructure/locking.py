"""Row-level locking helpers for querysets used inside a unit of work."""

from __future__ import annotations

from django.db import connections, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore


def lock_queryset_if_possible(queryset, *, skip_locked: bool = False):
    """Apply select_for_update when inside transaction.atomic().

    Backends without row locks (SQLite) serialize writers with a database
    lock instead, so the queryset is returned unchanged there. With
    ``skip_locked`` rows already locked by another transaction are left
    out where the backend supports it.
    """

    alias = queryset.db
    if not transaction.get_connection(alias).in_atomic_block:
        return queryset
    features = connections[alias].features
    if not features.has_select_for_update:
        return queryset

    options = {}
    if skip_locked and features.has_select_for_update_skip_locked:
        options["skip_locked"] = True

    try:
        return queryset.select_for_update(**options)
    except NotSupportedError:
        return queryset
