"""Data models for ipa_mcp."""

from ipa_mcp.models.command import CommandResult, HostBatchResult
from ipa_mcp.models.rpc import RPCFault, RPCRequest
from ipa_mcp.models.session import Session
from ipa_mcp.models.summary import HostSummary

__all__ = [
    "CommandResult",
    "HostBatchResult",
    "HostSummary",
    "RPCFault",
    "RPCRequest",
    "Session",
]
