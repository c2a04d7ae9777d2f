"""Run one aggregation cycle and print it: python -m oracle_core.engine [--attest]."""

from __future__ import annotations

import argparse
import asyncio
import json

from oracle_core.config import load_config
from oracle_core.engine.aggregator import build_snapshot
from oracle_core.engine.attestation import build_attestation
from oracle_core.logging import setup_logging
from oracle_core.providers import build_providers


async def run(config_path: str | None, attest: bool) -> None:
    cfg = load_config(config_path)
    setup_logging(level=cfg.logging.level, log_format=cfg.logging.format)
    providers = build_providers(cfg.providers)
    try:
        snapshot = await build_snapshot(providers, cfg.assets)
    finally:
        await providers.close()

    if attest:
        payloads = [
            build_attestation(asset, price, snapshot.timestamp).model_dump()
            for asset, price in snapshot.prices.items()
        ]
        print(json.dumps(payloads, indent=2))
    else:
        print(json.dumps(snapshot.to_wire(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="One-off oracle aggregation cycle")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument(
        "--attest",
        action="store_true",
        help="Print attestation contract arguments instead of the snapshot",
    )
    args = parser.parse_args()
    asyncio.run(run(args.config, args.attest))


if __name__ == "__main__":
    main()
