"""Strongly typed identifiers for domain entities.

Identifiers are integers assigned by storage. NewType keeps user, profile
and vote ids from being mixed up at call sites.
"""

from typing import NewType

UserId = NewType("UserId", int)
ProfileId = NewType("ProfileId", int)
RoleId = NewType("RoleId", int)
VoteId = NewType("VoteId", int)
