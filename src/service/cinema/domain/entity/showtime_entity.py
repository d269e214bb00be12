from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class Showtime:
    id: int
    movie_id: int
    time: datetime
    movie_title: Optional[str] = None
