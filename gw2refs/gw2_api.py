from typing import Any, Callable, Dict, List, Optional

import requests

from gw2refs.helpers.config import Settings
from gw2refs.helpers.errors import FetchError

CATEGORIES = ("specializations", "skills", "traits")


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def fetch_json(url: str, settings: Settings) -> Any:
    try:
        resp = requests.get(url, headers=settings.headers, timeout=settings.timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc
    try:
        return resp.json()
    except ValueError as exc:
        raise FetchError(f"GET {url} returned a non-JSON body") from exc


def fetch_ids(category: str, *, settings: Settings) -> List[int]:
    url = f"{settings.base_url}/{category}"
    data = fetch_json(url, settings)
    if not isinstance(data, list):
        raise FetchError(f"{category} id catalog is not a list (got {type(data).__name__})")
    bad = [v for v in data if not _is_id(v)]
    if bad:
        raise FetchError(f"{category} id catalog holds non-integer ids: {bad[:5]}")
    return data


def chunk_ids(ids: List[int], size: int) -> List[List[int]]:
    return [ids[idx:idx + size] for idx in range(0, len(ids), size)]


def _order_chunk(category: str, chunk: List[int], data: Any) -> List[Dict[str, Any]]:
    """
    Match returned records to the requested ids by their `id` field, not by
    position, and return them in request order.
    """
    if not isinstance(data, list):
        raise FetchError(f"{category} batch response is not a list (got {type(data).__name__})")
    by_id: Dict[int, Dict[str, Any]] = {}
    for record in data:
        if not isinstance(record, dict):
            raise FetchError(f"{category} batch response holds a non-object entry: {record!r}")
        rid = record.get("id")
        if not _is_id(rid):
            raise FetchError(f"{category} record without an integer id: {record.get('name')!r}")
        by_id[rid] = record
    missing = [i for i in chunk if i not in by_id]
    if missing:
        raise FetchError(f"{category} batch response is missing ids: {missing[:10]}")
    return [by_id[i] for i in chunk]


def fetch_records(
    ids: List[int],
    category: str,
    *,
    settings: Settings,
    progress: Optional[Callable[[str], None]] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch full records for `ids`, one request per chunk of at most
    `settings.chunk_size` ids, issued in order. Any failed chunk aborts the
    whole fetch.
    """
    records: List[Dict[str, Any]] = []
    done = 0
    for chunk in chunk_ids(ids, settings.chunk_size):
        joined = ",".join(str(i) for i in chunk)
        url = f"{settings.base_url}/{category}?ids={joined}"
        records.extend(_order_chunk(category, chunk, fetch_json(url, settings)))
        done += len(chunk)
        if progress:
            progress(f"Fetched {done}/{len(ids)} {category}")
    return records
