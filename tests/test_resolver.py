"""
PeerPoint - Resolver Tests

Tests for descriptor parsing, socket address conversion and preferred
local endpoint selection.

Copyright (c) 2024-2025 ReGen Designs LLC
"""

import socket

import pytest

from conftest import inet4, inet6, link
from peerpoint.network import (
    InetEndpoint,
    Network,
    NetworkInterface,
    get_preferred_local_endpoint,
    parse_descriptor,
    parse_endpoint,
    resolve_endpoint_async,
    socket_address_to_endpoint,
)
from peerpoint.utils.errors import (
    AddressResolutionError,
    EndpointError,
    EndpointFormatError,
    InterfaceEnumerationError,
    InvalidPortError,
    PeerPointError,
    UnsupportedFamilyError,
)


class TestParseEndpoint:
    """Tests for parse_endpoint."""

    @pytest.mark.parametrize("address,port", [
        ("192.168.1.10", 42424),
        ("10.0.0.5", 4000),
        ("0.0.0.0", 0),
        ("255.255.255.255", 65535),
        ("127.0.0.1", 1),
    ])
    def test_numeric_ipv4(self, address, port):
        """Test numeric addresses parse to exactly the input."""
        endpoint = parse_endpoint(f"inet:{address}/{port}")
        assert isinstance(endpoint, InetEndpoint)
        assert endpoint.address == socket.inet_aton(address)
        assert endpoint.port == port

    def test_round_trip(self):
        """Test parse then format reproduces the descriptor."""
        text = "inet:10.0.0.5/4000"
        assert parse_endpoint(text).to_descriptor() == text

    def test_numeric_address_needs_no_lookup(self, resolver):
        parse_endpoint("inet:10.0.0.5/4000")
        assert resolver.lookups == []

    def test_hostname_is_resolved(self, resolver):
        """Test names are resolved to the first address returned."""
        endpoint = parse_endpoint("inet:peer.example/9000")
        assert endpoint == InetEndpoint.from_ip("10.1.2.3", 9000)
        assert resolver.lookups == ["peer.example"]

    def test_hostname_resolving_to_ipv6(self, resolver):
        endpoint = parse_endpoint("inet:v6peer.example/9000")
        assert endpoint.host == "2001:db8::1"
        assert len(endpoint.address) == 16

    @pytest.mark.parametrize("text", [
        "192.168.1.10/42424",
        "tcp:192.168.1.10/42424",
        "INET:192.168.1.10/42424",
        "",
        ":192.168.1.10/1",
    ])
    def test_unrecognized_format(self, text):
        """Test descriptors without a known family tag."""
        with pytest.raises(EndpointFormatError) as exc:
            parse_endpoint(text)
        assert exc.value.message == "unrecognized endpoint format"

    @pytest.mark.parametrize("value", [None, 42, b"inet:10.0.0.1/80"])
    def test_non_string_input(self, value):
        with pytest.raises(EndpointFormatError):
            parse_endpoint(value)

    def test_missing_port_separator(self):
        with pytest.raises(EndpointFormatError) as exc:
            parse_endpoint("inet:192.168.1.10")
        assert exc.value.message == "malformed inet endpoint"
        assert exc.value.code == "ENDPOINT_FORMAT_ERROR"

    @pytest.mark.parametrize("port", [
        "abc", "", "-1", "+80", " 80", "80 ", "8_0", "0x50", "65536", "99999999999", "٣",
    ])
    def test_invalid_port(self, port):
        """Test ports must be plain decimals within 16 bits."""
        with pytest.raises(InvalidPortError) as exc:
            parse_endpoint(f"inet:192.168.1.10/{port}")
        assert exc.value.port == port

    def test_unresolvable_address(self, resolver):
        with pytest.raises(AddressResolutionError) as exc:
            parse_endpoint("inet:bad..host/80")
        assert exc.value.host == "bad..host"
        assert isinstance(exc.value.__cause__, OSError)

    def test_empty_address(self, resolver):
        with pytest.raises(AddressResolutionError):
            parse_endpoint("inet:/80")
        assert resolver.lookups == []

    def test_port_checked_before_lookup(self, resolver):
        """Test a bad port fails without a name lookup."""
        with pytest.raises(InvalidPortError):
            parse_endpoint("inet:peer.example/abc")
        assert resolver.lookups == []

    def test_errors_share_base(self):
        """Test callers can catch every parse failure at once."""
        for text in ["x", "inet:1.2.3.4", "inet:1.2.3.4/x"]:
            with pytest.raises(EndpointError):
                parse_endpoint(text)
        with pytest.raises(PeerPointError):
            parse_endpoint("x")


class TestParseDescriptor:
    """Tests for the non-blocking split step."""

    def test_no_lookup(self, resolver):
        descriptor = parse_descriptor("inet:peer.example/9000")
        assert descriptor.host == "peer.example"
        assert descriptor.port == 9000
        assert resolver.lookups == []

    def test_resolve_later(self, resolver):
        descriptor = parse_descriptor("inet:peer.example/9000")
        assert descriptor.resolve() == InetEndpoint.from_ip("10.1.2.3", 9000)

    def test_same_format_errors(self):
        with pytest.raises(EndpointFormatError):
            parse_descriptor("inet:10.0.0.1")
        with pytest.raises(InvalidPortError):
            parse_descriptor("inet:10.0.0.1/port")


class TestResolveAsync:
    """Tests for resolution inside an event loop."""

    @pytest.mark.asyncio
    async def test_numeric(self):
        endpoint = await resolve_endpoint_async("inet:10.0.0.5/4000")
        assert endpoint.to_descriptor() == "inet:10.0.0.5/4000"

    @pytest.mark.asyncio
    async def test_hostname(self, resolver):
        endpoint = await resolve_endpoint_async("inet:peer.example/7")
        assert endpoint == InetEndpoint.from_ip("10.1.2.3", 7)

    @pytest.mark.asyncio
    async def test_unresolvable(self, resolver):
        with pytest.raises(AddressResolutionError):
            await resolve_endpoint_async("inet:nowhere.invalid/80")

    @pytest.mark.asyncio
    async def test_format_error(self):
        with pytest.raises(EndpointFormatError):
            await resolve_endpoint_async("nowhere/80")


class TestSocketAddressToEndpoint:
    """Tests for socket_address_to_endpoint."""

    def test_ipv4(self):
        endpoint = socket_address_to_endpoint(("192.168.1.10", 5000))
        assert endpoint == InetEndpoint.from_ip("192.168.1.10", 5000)

    def test_ipv4_with_family(self):
        endpoint = socket_address_to_endpoint(("10.0.0.1", 80), socket.AF_INET)
        assert endpoint.host == "10.0.0.1"
        assert endpoint.port == 80

    def test_ipv6(self):
        endpoint = socket_address_to_endpoint(("2001:db8::1", 443, 0, 0), socket.AF_INET6)
        assert endpoint.host == "2001:db8::1"
        assert endpoint.port == 443
        assert len(endpoint.address) == 16

    def test_scoped_ipv6(self):
        endpoint = socket_address_to_endpoint(("fe80::1%eth0", 443, 0, 2))
        assert endpoint.address == socket.inet_pton(socket.AF_INET6, "fe80::1")

    def test_bound_socket(self):
        """Test the address a real socket reports converts back."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind(("127.0.0.1", 0))
            sockaddr = sock.getsockname()
            endpoint = socket_address_to_endpoint(sockaddr, sock.family)
        finally:
            sock.close()

        assert endpoint.host == "127.0.0.1"
        assert endpoint.port == sockaddr[1]

    @pytest.mark.parametrize("sockaddr", [
        "/tmp/peerpoint.sock",
        b"\x00abstract",
        ("localhost", 80),
        ("10.0.0.1", "80"),
        ("10.0.0.1", True),
        ("10.0.0.1",),
        ("10.0.0.1", 80, 0),
        ("10.0.0.1", 80, 0, 0),
        ["10.0.0.1", 80],
        None,
    ])
    def test_unsupported(self, sockaddr):
        with pytest.raises(UnsupportedFamilyError) as exc:
            socket_address_to_endpoint(sockaddr)
        assert exc.value.message == "unsupported socket address type"

    def test_unsupported_family(self):
        with pytest.raises(UnsupportedFamilyError):
            socket_address_to_endpoint(("10.0.0.1", 80), getattr(socket, "AF_UNIX", 1))

    def test_family_mismatch(self):
        with pytest.raises(UnsupportedFamilyError):
            socket_address_to_endpoint(("2001:db8::1", 80), socket.AF_INET)

    def test_no_lookup(self, resolver):
        with pytest.raises(UnsupportedFamilyError):
            socket_address_to_endpoint(("peer.example", 80))
        assert resolver.lookups == []


class TestPreferredLocalEndpoint:
    """Tests for get_preferred_local_endpoint."""

    def test_only_loopback_and_link_local(self):
        """Test nothing qualifies on a host with no routable address."""
        interfaces = [
            NetworkInterface("lo", ["127.0.0.1", "::1"]),
            NetworkInterface("eth0", ["169.254.10.20", "fe80::1%eth0"]),
        ]
        assert get_preferred_local_endpoint(interfaces) is None

    def test_single_candidate(self):
        interfaces = [
            NetworkInterface("lo", ["127.0.0.1"]),
            NetworkInterface("eth0", ["fe80::1", "192.168.1.10"]),
        ]
        endpoint = get_preferred_local_endpoint(interfaces)
        assert endpoint == InetEndpoint.from_ip("192.168.1.10", 0)
        assert endpoint.port == 0

    def test_ipv6_skipped(self):
        """Test a global IPv6 address is not chosen."""
        interfaces = [
            NetworkInterface("eth0", ["2001:db8::5"]),
            NetworkInterface("eth1", ["10.0.0.7"]),
        ]
        assert get_preferred_local_endpoint(interfaces).host == "10.0.0.7"

    def test_ipv6_only(self):
        interfaces = [NetworkInterface("eth0", ["2001:db8::5", "fe80::2"])]
        assert get_preferred_local_endpoint(interfaces) is None

    def test_first_match_wins(self):
        """Test system order decides, not address quality."""
        interfaces = [
            NetworkInterface("docker0", ["172.17.0.1"]),
            NetworkInterface("eth0", ["192.168.1.10", "192.168.1.11"]),
        ]
        assert get_preferred_local_endpoint(interfaces).host == "172.17.0.1"

    def test_first_address_within_interface(self):
        interfaces = [NetworkInterface("eth0", ["192.168.1.11", "192.168.1.10"])]
        assert get_preferred_local_endpoint(interfaces).host == "192.168.1.11"

    def test_no_interfaces(self):
        assert get_preferred_local_endpoint([]) is None

    def test_enumerates_host_interfaces(self, fake_interfaces):
        fake_interfaces({
            "lo": [inet4("127.0.0.1"), inet6("::1"), link("00:00:00:00:00:00")],
            "wlan0": [link(), inet6("fe80::1%wlan0"), inet4("192.168.0.42")],
        })
        assert get_preferred_local_endpoint() == InetEndpoint.from_ip("192.168.0.42", 0)

    def test_nothing_found_on_host(self, fake_interfaces):
        fake_interfaces({"lo": [inet4("127.0.0.1")]})
        assert get_preferred_local_endpoint() is None

    def test_enumeration_failure_is_an_error(self, broken_interfaces):
        """Test a platform failure is not reported as 'nothing found'."""
        with pytest.raises(InterfaceEnumerationError) as exc:
            get_preferred_local_endpoint()
        assert isinstance(exc.value.__cause__, OSError)


class TestNetwork:
    """Tests for the Network facade."""

    def test_injected_interfaces(self):
        network = Network(lambda: [NetworkInterface("eth0", ["10.9.8.7"])])
        assert network.get_preferred_local_endpoint().host == "10.9.8.7"

    def test_default_interfaces(self, fake_interfaces):
        fake_interfaces({"eth0": [inet4("10.1.1.1")]})
        assert Network().get_preferred_local_endpoint().host == "10.1.1.1"

    def test_delegates(self):
        network = Network()
        assert network.parse_endpoint("inet:10.0.0.5/4000").port == 4000
        assert network.socket_address_to_endpoint(("10.0.0.5", 1)).port == 1

    @pytest.mark.asyncio
    async def test_resolve_endpoint(self, resolver):
        endpoint = await Network().resolve_endpoint("inet:peer.example/1")
        assert endpoint.host == "10.1.2.3"
