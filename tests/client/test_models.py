"""Unit tests for the topology and request models (ptclient/models.py)."""

from ptclient.models import (
    Device,
    DeviceModification,
    Link,
    LinkRequest,
    Network,
    NewSessionRequest,
    Port,
    PortModification,
)
from tests.fixtures.transport import DEVICE_BODY, DEVICE_URL, NETWORK_BODY, PORT_URL


class TestDevice:
    """Tests for the Device model."""

    def test_from_wire_names(self) -> None:
        device = Device.model_validate({**DEVICE_BODY, "defaultGateway": "10.0.0.1"})
        assert device.url == DEVICE_URL
        assert device.default_gateway == "10.0.0.1"
        assert device.x == 100.0

    def test_from_attribute_names(self) -> None:
        device = Device(label="PC0", default_gateway="10.0.0.1")
        assert device.to_payload() == {"label": "PC0", "defaultGateway": "10.0.0.1"}

    def test_unknown_fields_are_kept(self) -> None:
        device = Device.model_validate({**DEVICE_BODY, "consoleEndpoint": "ws://x", "ports": 4})
        assert device.console_endpoint == "ws://x"
        assert device.to_payload()["ports"] == 4


class TestPortAndLink:
    """Tests for the Port and Link models."""

    def test_port(self) -> None:
        port = Port.model_validate({
            "url": PORT_URL,
            "portName": "FastEthernet0/0",
            "portIpAddress": "10.0.0.1",
            "portSubnetMask": "255.0.0.0",
        })
        assert port.port_name == "FastEthernet0/0"
        assert port.port_subnet_mask == "255.0.0.0"
        assert port.link is None

    def test_link_endpoints_default_to_empty(self) -> None:
        assert Link(url="http://h/links/1").endpoints == []


class TestNetwork:
    """Tests for the Network model."""

    def test_decodes_devices_and_edges(self) -> None:
        network = Network.model_validate({
            **NETWORK_BODY,
            "edges": [{"id": "l1", "url": "http://h/links/l1", "frm": "d1", "to": "d2"}],
        })
        assert isinstance(network.devices[0], Device)
        assert network.edges[0].frm == "d1"

    def test_empty_network(self) -> None:
        network = Network.model_validate({})
        assert network.devices == []
        assert network.edges == []


class TestRequestPayloads:
    """Tests for the request payload models."""

    def test_new_session_without_previous(self) -> None:
        payload = NewSessionRequest(file_url="http://h/f.pkt").to_payload()
        assert payload == {"fileUrl": "http://h/f.pkt"}

    def test_new_session_with_previous(self) -> None:
        payload = NewSessionRequest(
            file_url="http://h/f.pkt", same_user_as_in_session="s0"
        ).to_payload()
        assert payload == {"fileUrl": "http://h/f.pkt", "sameUserAsInSession": "s0"}

    def test_device_modification(self) -> None:
        assert DeviceModification(label="R1").to_payload() == {"label": "R1"}

    def test_port_modification(self) -> None:
        payload = PortModification(port_ip_address="10.0.0.1", port_subnet_mask="255.0.0.0")
        assert payload.to_payload() == {
            "portIpAddress": "10.0.0.1",
            "portSubnetMask": "255.0.0.0",
        }

    def test_link_request(self) -> None:
        assert LinkRequest(to_port=PORT_URL).to_payload() == {"toPort": PORT_URL}
