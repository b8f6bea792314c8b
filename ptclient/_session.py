"""Session sub-client for the PacketTracer Anywhere API.

This module provides SessionClient and AsyncSessionClient, which operate on
the topology of one editing session: fetching the network and creating,
modifying and removing devices, ports and links.

Only the topology fetch retries. All other operations issue exactly one
request; when it fails, or its body cannot be decoded, they log and raise
the error. Every request reports a 404 or 410 answer to the session's
expiry callback.

This is an internal module. Import from `ptclient` instead.
"""

from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from ptclient._base import AsyncBaseClient, BaseClient
from ptclient._http import RequestSettings
from ptclient._retry import (
    DEFAULT_RETRY_POLICY,
    AfterAllRetries,
    BeforeRetry,
    RetryPolicy,
    async_fetch_with_retry,
    fetch_with_retry,
)
from ptclient.exceptions import PTClientError
from ptclient.models import (
    Device,
    DeviceModification,
    Link,
    LinkRequest,
    Network,
    Port,
    PortModification,
)

if TYPE_CHECKING:
    from ptclient._http import AsyncHTTPClient, HTTPClient


def _device_payload(device: Device | dict[str, Any]) -> dict[str, Any]:
    """Serialize a device given as a model or as a plain mapping."""
    if isinstance(device, Device):
        return device.to_payload()
    return device


def _device_modification(label: str, default_gateway: str) -> dict[str, Any]:
    """Build the body of a device modification request."""
    # An empty gateway means "leave it as it is".
    modification = DeviceModification(label=label, default_gateway=default_gateway or None)
    return modification.to_payload()


def _modified_device(default_gateway: str, data: Any) -> Device:
    """Decode a modified device, restoring the gateway that was set."""
    # FIXME: the server echoes the device without the gateway it has just
    # stored. Remove once the PacketTracer interop layer returns it.
    device = Device.model_validate(data)
    if default_gateway:
        device.default_gateway = default_gateway
    return device


def _ports(data: Any) -> list[Port]:
    """Decode a list of ports."""
    return [Port.model_validate(p) for p in data or []]


def _first_endpoint(data: Any) -> str:
    """Decode a link and return the URL of its first endpoint."""
    link = Link.model_validate(data)
    if not link.endpoints:
        raise PTClientError(f"Link {link.url} has no endpoints")
    return link.endpoints[0]


def _device_decoder(default_gateway: str, patch_default_gateway: bool) -> Callable[[Any], Device]:
    """Pick the decoder of a device modification answer."""
    if patch_default_gateway:
        return partial(_modified_device, default_gateway)
    return Device.model_validate


# Synchronous SessionClient


class SessionClient(BaseClient):
    """Synchronous client for the resources of one session.

    The client is bound to a session URL and a session expiry callback for
    its whole lifetime and holds no other state, so it can be shared.

    Example:
        with PTAnywhereClient() as client:
            session = client.session(session_url, on_session_expired=restart)
            network = session.get_network(
                before_retry=lambda n, limit, kind: print(f"retry {n}/{limit}"),
                after_all_retries=lambda: print("giving up"),
            )
            for device in network.devices:
                print(device.label, [p.port_name for p in session.get_all_ports(device)])

    Attributes:
        session_url: URL of the session, without trailing slash.
        retry_policy: Retry policy of the topology fetch.
    """

    def __init__(
        self,
        http_client: "HTTPClient",
        session_url: str,
        on_session_expired: Callable[[], None],
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        settings: RequestSettings | None = None,
    ) -> None:
        """Initialize the session client.

        Args:
            http_client: The shared HTTP client instance.
            session_url: URL of the session.
            on_session_expired: Called whenever the server answers that the
                session no longer exists.
            retry_policy: Retry policy of the topology fetch.
            settings: Default settings for this session's requests.
        """
        super().__init__(http_client, settings=settings, on_session_expired=on_session_expired)
        self.session_url = session_url.rstrip("/")
        self.retry_policy = retry_policy

    def get_network(
        self,
        on_success: Callable[[Network], None] | None = None,
        before_retry: BeforeRetry | None = None,
        after_all_retries: AfterAllRetries | None = None,
    ) -> Network | None:
        """Retrieve the current network topology, retrying while unavailable.

        Retries after a 503 (waiting ``retry_policy.unavailable_delay``) and
        after a timeout (immediately), at most ``retry_policy.retry_limit``
        times.

        Args:
            on_success: Called once with the topology.
            before_retry: Called before each retry with the retry number
                (starting at 1), the retry limit and the ErrorKind of the
                failed attempt.
            after_all_retries: Called once if every retry failed.

        Returns:
            The topology, or None if all retries failed.

        Raises:
            SessionExpiredError: If the session no longer exists.
            InvalidResponseError: If the answer is not a topology.
            PTClientError: For any other failure.
        """
        url = f"{self.session_url}/network"
        return fetch_with_retry(
            lambda: self._dispatch("GET", url, decode=Network.model_validate),
            on_success=on_success,
            before_retry=before_retry,
            after_all_retries=after_all_retries,
            policy=self.retry_policy,
            description="topology",
        )

    def add_device(self, device: Device | dict[str, Any]) -> Device:
        """Create a new device in the topology.

        Args:
            device: The device to create; ``url`` and ``id`` are assigned
                by the server.

        Returns:
            The created device.
        """
        return self._request(
            "POST",
            f"{self.session_url}/devices",
            json=_device_payload(device),
            decode=Device.model_validate,
            failure_message="Something went wrong in the device creation.",
        )

    def remove_device(self, device: Device) -> None:
        """Remove a device from the topology."""
        self._request(
            "DELETE",
            device.url,
            failure_message="Something went wrong in the device removal.",
        )

    def modify_device(
        self,
        device: Device,
        label: str,
        default_gateway: str,
        patch_default_gateway: bool = True,
    ) -> Device:
        """Rename a device and set its default gateway.

        Args:
            device: The device to modify.
            label: New name of the device.
            default_gateway: New default gateway; an empty string leaves the
                gateway unchanged.
            patch_default_gateway: Overwrite the gateway of the returned
                device with a non-empty ``default_gateway``, as the server
                omits it.

        Returns:
            The modified device.
        """
        return self._request(
            "PUT",
            device.url,
            json=_device_modification(label, default_gateway),
            decode=_device_decoder(default_gateway, patch_default_gateway),
            failure_message="Something went wrong in the device modification.",
        )

    def get_all_ports(self, device: Device) -> list[Port]:
        """List all the ports of a device."""
        return self._request(
            "GET",
            f"{device.url}ports",
            decode=_ports,
            failure_message=f"Ports for the device {device.id} could not be loaded. Possible timeout.",
        )

    def get_available_ports(self, device: Device) -> list[Port]:
        """List the ports of a device that have no link attached."""
        return self._request(
            "GET",
            f"{device.url}ports?free=true",
            decode=_ports,
            failure_message=f"Something went wrong getting this devices' available ports {device.id}.",
        )

    def modify_port(self, port_url: str, ip_address: str, subnet_mask: str) -> Port:
        """Set the IP address and subnet mask of a port.

        Args:
            port_url: URL of the port to modify.
            ip_address: New IP address.
            subnet_mask: New subnet mask.

        Returns:
            The modified port.
        """
        modification = PortModification(port_ip_address=ip_address, port_subnet_mask=subnet_mask)
        return self._request(
            "PUT",
            port_url,
            json=modification.to_payload(),
            decode=Port.model_validate,
            failure_message="Something went wrong in the port modification.",
        )

    def create_link(self, from_port_url: str, to_port_url: str) -> Link:
        """Connect two ports.

        Args:
            from_port_url: URL of the first endpoint.
            to_port_url: URL of the second endpoint.

        Returns:
            The new link.
        """
        return self._request(
            "POST",
            f"{from_port_url}link",
            json=LinkRequest(to_port=to_port_url).to_payload(),
            decode=Link.model_validate,
            failure_message="Something went wrong in the link creation.",
        )

    def remove_link(self, link: Link) -> None:
        """Remove a link.

        Links cannot be deleted through their own URL; the link is fetched
        to find its first endpoint and deleted through that port.
        """
        endpoint = self._request(
            "GET",
            link.url,
            decode=_first_endpoint,
            failure_message=f"Something went wrong getting this link: {link.url}.",
        )
        self._request(
            "DELETE",
            f"{endpoint}link",
            failure_message="Something went wrong in the link removal.",
        )


# Asynchronous SessionClient


class AsyncSessionClient(AsyncBaseClient):
    """Asynchronous client for the resources of one session.

    Concurrent ``get_network`` calls each keep their own retry count.

    Example:
        async with AsyncPTAnywhereClient() as client:
            session = client.session(session_url, on_session_expired=restart)
            network, ports = await asyncio.gather(
                session.get_network(),
                session.get_all_ports(device),
            )

    Attributes:
        session_url: URL of the session, without trailing slash.
        retry_policy: Retry policy of the topology fetch.
    """

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        session_url: str,
        on_session_expired: Callable[[], None],
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        settings: RequestSettings | None = None,
    ) -> None:
        """Initialize the async session client.

        Args:
            http_client: The shared async HTTP client instance.
            session_url: URL of the session.
            on_session_expired: Called whenever the server answers that the
                session no longer exists.
            retry_policy: Retry policy of the topology fetch.
            settings: Default settings for this session's requests.
        """
        super().__init__(http_client, settings=settings, on_session_expired=on_session_expired)
        self.session_url = session_url.rstrip("/")
        self.retry_policy = retry_policy

    async def get_network(
        self,
        on_success: Callable[[Network], None] | None = None,
        before_retry: BeforeRetry | None = None,
        after_all_retries: AfterAllRetries | None = None,
    ) -> Network | None:
        """Retrieve the current network topology, retrying while unavailable.

        See SessionClient.get_network.
        """
        url = f"{self.session_url}/network"
        return await async_fetch_with_retry(
            lambda: self._dispatch("GET", url, decode=Network.model_validate),
            on_success=on_success,
            before_retry=before_retry,
            after_all_retries=after_all_retries,
            policy=self.retry_policy,
            description="topology",
        )

    async def add_device(self, device: Device | dict[str, Any]) -> Device:
        """Create a new device in the topology."""
        return await self._request(
            "POST",
            f"{self.session_url}/devices",
            json=_device_payload(device),
            decode=Device.model_validate,
            failure_message="Something went wrong in the device creation.",
        )

    async def remove_device(self, device: Device) -> None:
        """Remove a device from the topology."""
        await self._request(
            "DELETE",
            device.url,
            failure_message="Something went wrong in the device removal.",
        )

    async def modify_device(
        self,
        device: Device,
        label: str,
        default_gateway: str,
        patch_default_gateway: bool = True,
    ) -> Device:
        """Rename a device and set its default gateway.

        See SessionClient.modify_device.
        """
        return await self._request(
            "PUT",
            device.url,
            json=_device_modification(label, default_gateway),
            decode=_device_decoder(default_gateway, patch_default_gateway),
            failure_message="Something went wrong in the device modification.",
        )

    async def get_all_ports(self, device: Device) -> list[Port]:
        """List all the ports of a device."""
        return await self._request(
            "GET",
            f"{device.url}ports",
            decode=_ports,
            failure_message=f"Ports for the device {device.id} could not be loaded. Possible timeout.",
        )

    async def get_available_ports(self, device: Device) -> list[Port]:
        """List the ports of a device that have no link attached."""
        return await self._request(
            "GET",
            f"{device.url}ports?free=true",
            decode=_ports,
            failure_message=f"Something went wrong getting this devices' available ports {device.id}.",
        )

    async def modify_port(self, port_url: str, ip_address: str, subnet_mask: str) -> Port:
        """Set the IP address and subnet mask of a port."""
        modification = PortModification(port_ip_address=ip_address, port_subnet_mask=subnet_mask)
        return await self._request(
            "PUT",
            port_url,
            json=modification.to_payload(),
            decode=Port.model_validate,
            failure_message="Something went wrong in the port modification.",
        )

    async def create_link(self, from_port_url: str, to_port_url: str) -> Link:
        """Connect two ports."""
        return await self._request(
            "POST",
            f"{from_port_url}link",
            json=LinkRequest(to_port=to_port_url).to_payload(),
            decode=Link.model_validate,
            failure_message="Something went wrong in the link creation.",
        )

    async def remove_link(self, link: Link) -> None:
        """Remove a link through its first endpoint."""
        endpoint = await self._request(
            "GET",
            link.url,
            decode=_first_endpoint,
            failure_message=f"Something went wrong getting this link: {link.url}.",
        )
        await self._request(
            "DELETE",
            f"{endpoint}link",
            failure_message="Something went wrong in the link removal.",
        )
