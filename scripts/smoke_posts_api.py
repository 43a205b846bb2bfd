#!/usr/bin/env python3
"""Posts API integration smoke test.

Exercises count, list, page, and lookup against a real posts API using both
client styles.

Usage:
    POST_API_URL=https://posts.example.com \
        uv run python scripts/smoke_posts_api.py [query]
"""

import asyncio
import sys

from remote_posts.config import Settings
from remote_posts.errors import NotFoundError
from remote_posts.factory import create_post_client


async def main(q: str | None) -> None:
    settings = Settings()

    print("=== Posts API Smoke Test ===")
    print(f"Clients: {sorted(settings.client_registry.mappings)}")
    print(f"Query: {q or '(none)'}\n")

    for style in ("declarative", "imperative"):
        print(f"--- {style} ---")
        async with create_post_client(settings, style=style) as client:
            total = await client.count_all(q)
            print(f"1. count_all: {total}")

            posts = await client.list_all(q, limit=3)
            print(f"2. list_all: {[p.id for p in posts]}")

            page = await client.get_all_posts(q, 0, 3)
            print(f"3. get_all_posts: {len(page.items)} item(s), total={page.total_count}")

            if posts:
                post = await client.get_by_id(posts[0].id)
                print(f"4. get_by_id({post.id!r}): {post.title or '(untitled)'}")

            try:
                await client.get_by_id("__smoke_missing__")
                print("5. ❌ expected NotFoundError")
            except NotFoundError as exc:
                print(f"5. ✅ missing id → {exc}")
        print()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
