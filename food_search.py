# food_search.py
from __future__ import annotations
import argparse, json, logging
from typing import List, Sequence

from index_store import CatalogIndex, INDEX
from paths import FOODS_PATH, SNAPSHOT_PATH
from schemas import CatalogRecord, SearchResult
from search_normalize import fold, query_terms

logger = logging.getLogger(__name__)

MAX_RESULTS = 50


def search(
    query: str | None, records: Sequence[CatalogRecord], limit: int = MAX_RESULTS
) -> List[SearchResult]:
    """
    Two tiers, each kept in catalog order:
      1) every term is a prefix of the folded name,
      2) every term occurs somewhere in folded name + keywords.
    Empty query -> the first `limit` records unranked.
    """
    terms = query_terms((query or "").strip())
    if not terms:
        return list(records[:limit])

    starts: List[int] = []
    contains: List[int] = []
    for i, rec in enumerate(records):
        name_norm = fold(rec.name)
        if all(name_norm.startswith(t) for t in terms):
            starts.append(i)
            continue
        hay = fold(f"{rec.name} {rec.keywords}")
        if all(t in hay for t in terms):
            contains.append(i)
        if len(starts) >= limit:
            break

    ranked = (starts + contains)[:limit]
    return [records[i] for i in ranked]


def search_catalog(
    query: str | None, index: CatalogIndex = INDEX, limit: int = MAX_RESULTS
) -> List[SearchResult]:
    """Search entry point for request handlers; never raises."""
    try:
        return search(query, index.ensure_loaded(), limit=limit)
    except Exception:
        logger.exception("[search] failed for query %r", query)
        return []


def main():
    ap = argparse.ArgumentParser(description="Food catalog search (prefix + contains)")
    ap.add_argument("--q", default="")
    ap.add_argument("--k", type=int, default=MAX_RESULTS)
    ap.add_argument("--data", default=str(FOODS_PATH))
    ap.add_argument("--snapshot", default=str(SNAPSHOT_PATH))
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    index = CatalogIndex(args.data, args.snapshot)
    print(
        json.dumps(
            [r.model_dump() for r in search_catalog(args.q, index, limit=args.k)],
            ensure_ascii=False,
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
