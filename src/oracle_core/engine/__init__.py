"""Reconciliation engine, aggregation cycle, and the runtime policies around it."""

from oracle_core.engine.aggregator import build_snapshot
from oracle_core.engine.attestation import AttestationPayload, build_attestation
from oracle_core.engine.cache import SnapshotCache
from oracle_core.engine.ratelimit import RateLimiter
from oracle_core.engine.reconcile import (
    confidence_for_divergence,
    data_hash,
    divergence_bps,
    reconcile,
)

__all__ = [
    "AttestationPayload",
    "RateLimiter",
    "SnapshotCache",
    "build_attestation",
    "build_snapshot",
    "confidence_for_divergence",
    "data_hash",
    "divergence_bps",
    "reconcile",
]
