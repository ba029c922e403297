import os
from typing import Optional

import psycopg


def get_db_url() -> Optional[str]:
    url = (os.getenv("DB_URL") or "").strip()
    return url or None


async def check_db(db_url: str) -> None:
    async with await psycopg.AsyncConnection.connect(db_url) as conn:
        async with conn.cursor() as cur:
            await cur.execute("select 1")
            await cur.fetchone()
