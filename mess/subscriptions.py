"""
Live mess menu subscriptions.

A subscription pushes a fresh weekly snapshot to its callback whenever one of
the owner's menu entries is saved or deleted. It must be disposed when its
consumer goes away; events that arrive after dispose() are dropped.
"""
import itertools
import logging
from typing import Callable

from django.db.models.signals import post_save, post_delete

from .models import MessMenuEntry

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


class MenuSubscription:
    """
    Cancellable subscription to one owner's menu.

    Usage:
        with service.subscribe(ctx, render) as subscription:
            ...
    """

    def __init__(self, account_id: int, callback: Callable[[dict], None], snapshot: Callable[[], dict]):
        self.account_id = account_id
        self.callback = callback
        self.snapshot = snapshot
        self.uid = f"mess-menu-subscription-{next(_ids)}"
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def start(self, deliver_initial: bool = True) -> 'MenuSubscription':
        post_save.connect(self._on_change, sender=MessMenuEntry, weak=False, dispatch_uid=self.uid)
        post_delete.connect(self._on_change, sender=MessMenuEntry, weak=False, dispatch_uid=self.uid)
        logger.debug(f"Menu subscription {self.uid} started for account {self.account_id}")
        if deliver_initial:
            self._deliver()
        return self

    def _deliver(self):
        if self._disposed:
            return
        self.callback(self.snapshot())

    def _on_change(self, sender, instance, **kwargs):
        if self._disposed or instance.account_id != self.account_id:
            return
        self._deliver()

    def dispose(self) -> None:
        """Stop receiving updates. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        post_save.disconnect(sender=MessMenuEntry, dispatch_uid=self.uid)
        post_delete.disconnect(sender=MessMenuEntry, dispatch_uid=self.uid)
        logger.debug(f"Menu subscription {self.uid} disposed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False
