#!/usr/bin/env python3
"""Demo: query a running guide API the way an assistant would.

Requires the catalog to be indexed and the API running:
    python -m guide_api index path/to/guides
    python -m guide_api serve

Usage:
    python scripts/query_guides.py [--api-url URL] [QUERY ...]
"""

import argparse
import sys

import httpx

DEFAULT_QUERIES = [
    "webhook retry",
    "test data prefix",
    "event subscriber",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Search the guide API")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="Guide API base URL (default: http://localhost:8000)",
    )
    parser.add_argument("queries", nargs="*", default=DEFAULT_QUERIES)
    args = parser.parse_args()

    with httpx.Client(base_url=args.api_url, timeout=10.0) as client:
        try:
            resp = client.get("/health")
        except httpx.ConnectError:
            print(f"Cannot connect to {args.api_url}")
            print("Make sure the API is running: python -m guide_api serve")
            sys.exit(1)

        if resp.status_code != 200:
            print(f"API unhealthy: {resp.text}")
            sys.exit(1)

        areas = client.get("/areas").json()["items"]
        summary = ", ".join(f"{a['area']} ({a['count']})" for a in areas)
        print(f"Catalog areas: {summary or 'none'}\n")

        for query in args.queries:
            resp = client.get("/search", params={"q": query, "limit": 3})
            if resp.status_code != 200:
                print(f"  {query!r:24s} -> ERROR {resp.status_code}: {resp.json()}")
                continue

            hits = resp.json()["items"]
            print(f"  {query!r:24s} -> {len(hits)} hit(s)")
            for hit in hits:
                print(f"      {hit['score']:3d}  {hit['slug']}  ({hit['difficulty']})")

            if hits:
                guide = client.get(f"/guides/{hits[0]['slug']}").json()
                print(f"      top: {guide['title']}: {guide['description']}")


if __name__ == "__main__":
    main()
