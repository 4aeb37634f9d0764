"""Role entity."""

from usermgmt.domain.model.common import DomainModel
from usermgmt.domain.value import RoleId


class Role(DomainModel):
    """Named role a user may reference."""

    id: RoleId
    name: str
