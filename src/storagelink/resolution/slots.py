"""Map a resolver call to a local answer or a remote storage read."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storagelink.core.models import StoragePath
from storagelink.core.types import (
    COIN_TYPE_ETH,
    AnswerSource,
    ResolutionProfile,
    evm_coin_type,
)
from storagelink.resolution.calls import ResolutionCall
from storagelink.resolution.decoder import Carry

logger = logging.getLogger(__name__)

# Storage layout of the remote registry. Must match the deployed contract
# exactly; a mismatch reads the wrong slot without any error.
SLOT_NAME = 0
SLOT_SUPPLY = 6
SLOT_URI = 7
SLOT_ADDRESSES = 8
SLOT_TEXTS = 9
SLOT_CONTENTHASH = 10


@dataclass(frozen=True)
class ShortCircuit:
    """Answer computable from local records without a fetch."""

    source: AnswerSource


@dataclass(frozen=True)
class RemoteRead:
    """A remote storage read and how to decode its result."""

    path: StoragePath
    carry: Carry


LookupPlan = ShortCircuit | RemoteRead


def plan_lookup(
    call: ResolutionCall,
    label_hash: bytes | None,
    chain_id: int,
) -> LookupPlan:
    """
    Plan how to answer ``call``.

    ``label_hash`` is the label directly under the authoritative node, or
    None when the call targets the authoritative node itself. The result is
    a pure function of the arguments.
    """
    profile = call.profile
    if profile is None:
        return ShortCircuit(AnswerSource.PLACEHOLDER)

    if label_hash is None:
        plan = _plan_at_node(call, profile, chain_id)
    else:
        plan = _plan_at_label(call, profile, label_hash)

    logger.debug(f"Planned {profile.signature}: {plan}")
    return plan


def _plan_at_node(
    call: ResolutionCall,
    profile: ResolutionProfile,
    chain_id: int,
) -> LookupPlan:
    if profile == ResolutionProfile.ADDR:
        return ShortCircuit(AnswerSource.VERIFIER)

    if profile == ResolutionProfile.ADDR_COIN:
        if call.coin_type == COIN_TYPE_ETH:
            return ShortCircuit(AnswerSource.VERIFIER)
        if call.coin_type == evm_coin_type(chain_id):
            return ShortCircuit(AnswerSource.TARGET)
        return ShortCircuit(AnswerSource.EMPTY)

    if profile == ResolutionProfile.TEXT:
        if call.key == "description":
            return RemoteRead(StoragePath(SLOT_SUPPLY), Carry.supply())
        if call.key == "name":
            return RemoteRead(StoragePath(SLOT_NAME, dynamic=True), Carry.for_profile(profile))
        if call.key == "url":
            return RemoteRead(StoragePath(SLOT_URI, dynamic=True), Carry.for_profile(profile))
        return ShortCircuit(AnswerSource.EMPTY)

    return ShortCircuit(AnswerSource.EMPTY)


def _plan_at_label(
    call: ResolutionCall,
    profile: ResolutionProfile,
    label_hash: bytes,
) -> LookupPlan:
    carry = Carry.for_profile(profile)

    if profile == ResolutionProfile.ADDR:
        path = StoragePath(SLOT_ADDRESSES, dynamic=True).follow(label_hash).follow(COIN_TYPE_ETH)
    elif profile == ResolutionProfile.ADDR_COIN:
        path = StoragePath(SLOT_ADDRESSES, dynamic=True).follow(label_hash).follow(call.coin_type)
    elif profile == ResolutionProfile.TEXT:
        path = StoragePath(SLOT_TEXTS, dynamic=True).follow(label_hash).follow(call.key)
    else:
        path = StoragePath(SLOT_CONTENTHASH, dynamic=True).follow(label_hash)

    return RemoteRead(path, carry)
