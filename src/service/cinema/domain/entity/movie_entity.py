from typing import Optional

import attrs


DEFAULT_MOVIE_DESCRIPTION = 'No description available'
DEFAULT_POSTER_URL = 'https://via.placeholder.com/300x450/1a1a1a/ffffff?text=No+Image'


@attrs.define
class Movie:
    id: int
    title: str
    description: Optional[str] = None
    poster_url: Optional[str] = None

    @property
    def display_description(self) -> str:
        return self.description or DEFAULT_MOVIE_DESCRIPTION

    @property
    def display_poster_url(self) -> str:
        return self.poster_url or DEFAULT_POSTER_URL
