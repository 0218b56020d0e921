"""
搜索结果去重与合并
"""

from typing import List, Sequence, Set

from ad_filter import is_ad_url
from models import SearchItem
from url_normalizer import normalize_url


def merge_and_deduplicate(
    all_results: Sequence[Sequence[SearchItem]],
    max_results: int,
) -> List[SearchItem]:
    """Interleave engine result lists round-robin, dropping ads and duplicate URLs.

    Index 0 of every list is taken (in list order) before any index 1, so the head
    of the output mixes sources even when one engine returns many more results.
    The first item seen for a normalized URL wins.
    """
    merged: List[SearchItem] = []
    if max_results <= 0:
        return merged

    seen: Set[str] = set()
    max_len = max((len(results) for results in all_results), default=0)
    for idx in range(max_len):
        for engine_results in all_results:
            if idx >= len(engine_results):
                continue
            item = engine_results[idx]

            if is_ad_url(item.url):
                continue

            key = normalize_url(item.url)
            if key in seen:
                continue

            seen.add(key)
            merged.append(item)
            if len(merged) >= max_results:
                return merged
    return merged
