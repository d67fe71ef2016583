"""Audience selectors over the full recipient list."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from .delivery import Recipient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllOptedIn:
    """Every recipient that has registered for notifications."""

    def select(self, recipients: Iterable[Recipient]) -> list[Recipient]:
        return [r for r in recipients if r.opted_in]


@dataclass(frozen=True)
class FollowersOf:
    """
    Recipients following ``fid``.

    Placeholder: there is no social-graph collaborator yet, so this selects
    the same recipients as AllOptedIn.
    """

    fid: int

    def select(self, recipients: Iterable[Recipient]) -> list[Recipient]:
        logger.info(
            f"Follower resolution not implemented, sending to followers of FID {self.fid} "
            "as all opted-in users"
        )
        return AllOptedIn().select(recipients)


Audience = Union[AllOptedIn, FollowersOf]
