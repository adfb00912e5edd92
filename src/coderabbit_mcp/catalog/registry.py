"""CapabilityRegistry — the immutable catalog of tools and resources.

Pure lookups, no I/O.  Both lists keep declaration order so clients see the
same ordering on every call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from coderabbit_mcp.catalog.resources import RENDERERS, RESOURCES
from coderabbit_mcp.catalog.tools import DEFAULT_AGENT_URL, build_tools
from coderabbit_mcp.protocol.errors import UnknownResourceError
from coderabbit_mcp.protocol.models import ResourceContents, ResourceDescriptor, ToolDescriptor


class CapabilityRegistry:
    """Read-only view over the declared tools and resources.

    Usage::

        registry = CapabilityRegistry.default()
        registry.list_tools()                  # six descriptors, fixed order
        registry.read_resource("coderabbit://commands/help")
    """

    def __init__(
        self,
        tools: Iterable[ToolDescriptor],
        resources: Iterable[ResourceDescriptor],
        renderers: Mapping[str, Callable[[], str]],
    ) -> None:
        self._tools = tuple(tools)
        self._resources = tuple(resources)
        self._tools_by_name = MappingProxyType({t.name: t for t in self._tools})
        self._resources_by_uri = MappingProxyType({r.uri: r for r in self._resources})
        self._renderers = MappingProxyType(dict(renderers))

        if len(self._tools_by_name) != len(self._tools):
            msg = "duplicate tool name in catalog"
            raise ValueError(msg)
        if len(self._resources_by_uri) != len(self._resources):
            msg = "duplicate resource URI in catalog"
            raise ValueError(msg)
        missing = set(self._resources_by_uri) - set(self._renderers)
        if missing:
            msg = f"resources without a renderer: {sorted(missing)}"
            raise ValueError(msg)

    @classmethod
    def default(cls, *, agent_url: str = DEFAULT_AGENT_URL) -> CapabilityRegistry:
        """Build the registry from the built-in catalog.

        *agent_url* is advertised as the ``check_health`` default.
        """
        return cls(build_tools(agent_url), RESOURCES, RENDERERS)

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        return self._tools

    def list_resources(self) -> tuple[ResourceDescriptor, ...]:
        return self._resources

    def get_tool(self, name: str) -> ToolDescriptor | None:
        return self._tools_by_name.get(name)

    def get_resource(self, uri: str) -> ResourceDescriptor | None:
        return self._resources_by_uri.get(uri)

    def read_resource(self, uri: str) -> ResourceContents:
        """Render the body of the resource at *uri*.

        Raises:
            UnknownResourceError: *uri* is not in the catalog.
        """
        descriptor = self.get_resource(uri)
        if descriptor is None:
            raise UnknownResourceError(uri)
        text = self._renderers[uri]()
        return ResourceContents(uri=uri, mime_type=descriptor.mime_type, text=text)
