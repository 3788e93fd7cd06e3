"""Compare ways of building a string.

Run with:

  microbench run examples/bench_string_join.py --json results.json
"""

import asyncio

WORDS = [f"word{i}" for i in range(200)]


def concat():
    out = ""
    for word in WORDS:
        out += word
    return out


def join():
    return "".join(WORDS)


async def join_after_yield():
    await asyncio.sleep(0)
    return "".join(WORDS)


def register(suite):
    suite.add("concat", concat)
    suite.add("join", join)
    suite.add("join (async)", join_after_yield)
