from __future__ import annotations
import json
from typing import Any, Dict, List, Union

from core.errors import DecodeError
from models.dto import Track

# response key -> (Track field, expected type)
REQUIRED_FIELDS = {
    "trackId": ("track_id", int),
    "trackName": ("title", str),
    "artistName": ("artist_name", str),
    "collectionName": ("album_name", str),
    "artworkUrl60": ("artwork_url", str),
}


def decode_results(payload: Union[bytes, str]) -> List[Track]:
    """
    Strict decode of a search response body:
    { "results": [ { "trackId": 1, "trackName": "...", ... }, ... ] }

    One bad element fails the whole payload; extra keys are ignored.
    """
    try:
        data = json.loads(payload)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError("top level is not an object")
    results = data.get("results")
    if not isinstance(results, list):
        raise DecodeError("'results' is missing or not an array")

    return [_decode_track(i, item) for i, item in enumerate(results)]


def _decode_track(index: int, item: Any) -> Track:
    if not isinstance(item, dict):
        raise DecodeError(f"results[{index}] is not an object")

    kwargs: Dict[str, Any] = {}
    for key, (name, typ) in REQUIRED_FIELDS.items():
        if key not in item:
            raise DecodeError(f"results[{index}] is missing '{key}'")
        value = item[key]
        # bool is an int subclass; JSON true/false is not an id
        if not isinstance(value, typ) or isinstance(value, bool):
            raise DecodeError(
                f"results[{index}].{key} should be {typ.__name__}, got {type(value).__name__}"
            )
        kwargs[name] = value
    return Track(**kwargs)
