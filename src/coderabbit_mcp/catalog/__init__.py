"""Capability catalog — declared tools, resources, and the registry over them."""

from coderabbit_mcp.catalog.registry import CapabilityRegistry
from coderabbit_mcp.catalog.resources import RESOURCES
from coderabbit_mcp.catalog.tools import TOOLS

__all__ = ["RESOURCES", "TOOLS", "CapabilityRegistry"]
