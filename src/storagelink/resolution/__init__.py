"""Resolution layer: name walking, slot planning, dispatch and decoding."""

from storagelink.resolution.calls import (
    PLACEHOLDER_RESULT,
    ResolutionCall,
    decode_address_result,
    decode_bytes_result,
    decode_call,
    decode_text_result,
    encode_call,
)
from storagelink.resolution.decoder import SUPPLY_TAG, Carry, decode_response
from storagelink.resolution.dispatch import ProofFetcher, RequestDispatcher
from storagelink.resolution.gateway import GatewayProofFetcher
from storagelink.resolution.slots import (
    LookupPlan,
    RemoteRead,
    ShortCircuit,
    plan_lookup,
)
from storagelink.resolution.walker import NameWalker, subdomain_label_hash

__all__ = [
    # Calls
    "PLACEHOLDER_RESULT",
    "ResolutionCall",
    "decode_address_result",
    "decode_bytes_result",
    "decode_call",
    "decode_text_result",
    "encode_call",
    # Walker
    "NameWalker",
    "subdomain_label_hash",
    # Slots
    "LookupPlan",
    "RemoteRead",
    "ShortCircuit",
    "plan_lookup",
    # Dispatch
    "Carry",
    "GatewayProofFetcher",
    "ProofFetcher",
    "RequestDispatcher",
    "SUPPLY_TAG",
    "decode_response",
]
