#!/usr/bin/env python3
"""Smoke test for a running oracle server: hits every endpoint once."""

import asyncio
import json
import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3042"

# (label, path, summary of the JSON body)
CHECKS = [
    ("health", "/health", lambda d: f"cache age: {d['cacheAge']}"),
    ("snapshot", "/snapshot", lambda d: f"{len(d['prices'])} prices at {d['iso']}"),
    ("price", "/price/BTC", lambda d: (
        f"BTC ${d['price']:,.2f}, confidence {d['confidence']}, "
        f"divergence {d['divergenceBps']}bps, hash {d['dataHash'][:18]}..."
    )),
    ("prices", "/prices", lambda d: ", ".join(d["prices"])),
    ("fear-greed", "/fear-greed", lambda d: f"{d.get('value')} ({d.get('label')})"),
    ("tvl", "/tvl", lambda d: f"top chain: {d['chains'][0]['chain']}" if "chains" in d else d),
    ("stablecoins", "/stablecoins", lambda d: f"{len(d.get('stablecoins', []))} stablecoins"),
    ("gas", "/gas", lambda d: json.dumps(d)),
    ("verify", "/verify/0x00", lambda d: f"contract {d['contract']}"),
    ("untracked asset", "/price/NOTACOIN", lambda d: d.get("error")),
]


async def test_endpoints():
    """Hit every endpoint and print a one-line summary of each."""
    async with httpx.AsyncClient(timeout=30.0) as client:
        print(f"Testing oracle API at {BASE_URL}...\n")

        for i, (label, path, summarize) in enumerate(CHECKS, start=1):
            print(f"{i}. Testing {path} ({label})")
            try:
                response = await client.get(f"{BASE_URL}{path}")
                print(f"   Status: {response.status_code}")
                print(f"   {summarize(response.json())}\n")
            except Exception as e:
                print(f"   Error: {e}\n")

        print("Testing read-only enforcement (POST /price/BTC)")
        response = await client.post(f"{BASE_URL}/price/BTC", json={"price": 1})
        print(f"   Status: {response.status_code} (expected 405)\n")


if __name__ == "__main__":
    asyncio.run(test_endpoints())
