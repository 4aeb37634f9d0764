"""Vote entity.

A vote is one user's rating of a profile. Each user holds at most one live
vote per profile; voting again replaces the value in place.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from usermgmt.domain.model.common import DomainModel, utc_now
from usermgmt.domain.value import ProfileId, UserId, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per (user, profile) pair (enforced by database unique constraint)
    - Value is a signed small integer, usually +1 or -1
    """

    id: Optional[VoteId] = None
    user_id: UserId
    profile_id: ProfileId
    value: VoteValue
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
