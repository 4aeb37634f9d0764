"""Domain value types."""

from typing import Annotated

from pydantic import Field

SMALLINT_MIN = -32768
SMALLINT_MAX = 32767

# Signed small integer, typically +1 (up) or -1 (down)
VoteValue = Annotated[int, Field(ge=SMALLINT_MIN, le=SMALLINT_MAX)]
