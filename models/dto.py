from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Track:
    track_id: int
    title: str = field(compare=False)
    artist_name: str = field(compare=False)
    album_name: str = field(compare=False)
    artwork_url: str = field(compare=False)  # may be empty or unusable

    @property
    def id(self) -> int:
        return self.track_id


class SearchPhase(Enum):
    IDLE = "idle"
    BUILDING = "building"
    IN_FLIGHT = "in_flight"
    DECODING = "decoding"
    POPULATED = "populated"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    results: Tuple[Track, ...] = ()
    is_alert_visible: bool = False
    alert_message: str = ""
