"""Topology and request models for the PacketTracer Anywhere client.

The API speaks camelCase JSON. Models accept both the wire names and the
snake_case attribute names, keep unknown fields, and are serialized back
with the wire names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire names, leaving out unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# Topology models


class Device(APIModel):
    """A device (router, switch, PC...) in the session's topology.

    Attributes:
        id: Server-side identifier.
        url: Absolute URL of the device resource, ending with a slash.
        label: Name shown for the device.
        group: Device type/group as understood by the server.
        x: Horizontal position in the topology canvas.
        y: Vertical position in the topology canvas.
        default_gateway: Configured default gateway, if any.
        console_endpoint: URL of the device's command line, if any.
    """

    id: str | None = None
    url: str | None = None
    label: str | None = None
    group: str | None = None
    x: float | None = None
    y: float | None = None
    default_gateway: str | None = None
    console_endpoint: str | None = None


class Port(APIModel):
    """A network port of a device.

    Attributes:
        url: Absolute URL of the port resource, ending with a slash.
        port_name: Name of the port (e.g. "FastEthernet0/0").
        port_ip_address: Configured IP address, if any.
        port_subnet_mask: Configured subnet mask, if any.
        link: URL of the link attached to the port, if any.
    """

    url: str
    port_name: str | None = None
    port_ip_address: str | None = None
    port_subnet_mask: str | None = None
    link: str | None = None


class Link(APIModel):
    """A link between two ports.

    Attributes:
        id: Server-side identifier.
        url: Absolute URL of the link resource.
        endpoints: URLs of the two connected ports.
    """

    id: str | None = None
    url: str | None = None
    endpoints: list[str] = Field(default_factory=list)


class Edge(APIModel):
    """A link as listed in the network topology.

    Attributes:
        id: Server-side identifier.
        url: Absolute URL of the link resource.
        frm: Identifier of the first connected device.
        to: Identifier of the second connected device.
    """

    id: str | None = None
    url: str | None = None
    frm: str | None = None
    to: str | None = None


class Network(APIModel):
    """The complete topology of a session."""

    devices: list[Device] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


# Request payloads


class NewSessionRequest(APIModel):
    """Body of a session creation request.

    Attributes:
        file_url: URL of the file opened when the session starts.
        same_user_as_in_session: Id of a previous session of the same user,
            used by the server to keep the user on the same instance.
    """

    file_url: str
    same_user_as_in_session: str | None = None


class DeviceModification(APIModel):
    """Body of a device modification request."""

    label: str
    default_gateway: str | None = None


class PortModification(APIModel):
    """Body of a port modification request."""

    port_ip_address: str
    port_subnet_mask: str


class LinkRequest(APIModel):
    """Body of a link creation request.

    Attributes:
        to_port: URL of the port the link ends at.
    """

    to_port: str
