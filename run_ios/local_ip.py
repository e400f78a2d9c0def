import ipaddress
import socket
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

import psutil


@dataclass
class InterfaceAddress:
    """네트워크 인터페이스 주소 정보"""
    family: str
    address: str
    internal: bool


FAMILY_NAMES = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def find_local_ip(interfaces: Mapping[str, Sequence[InterfaceAddress]]) -> Optional[str]:
    """외부 IPv4 주소 중 첫 번째를 반환합니다. 없으면 None."""
    for addresses in interfaces.values():
        for iface in addresses:
            if iface.family != "IPv4" or iface.internal:
                continue
            return iface.address
    return None


def _is_loopback(address: str) -> bool:
    # IPv6 주소에는 "%en0" 같은 스코프가 붙을 수 있음
    try:
        return ipaddress.ip_address(address.split("%", 1)[0]).is_loopback
    except ValueError:
        return False


def list_interfaces() -> Dict[str, List[InterfaceAddress]]:
    """psutil로 시스템 네트워크 인터페이스를 나열합니다."""
    interfaces: Dict[str, List[InterfaceAddress]] = {}

    for name, addrs in psutil.net_if_addrs().items():
        interfaces[name] = [
            InterfaceAddress(
                family=FAMILY_NAMES.get(addr.family, getattr(addr.family, "name", str(addr.family))),
                address=addr.address,
                internal=_is_loopback(addr.address),
            )
            for addr in addrs
        ]

    return interfaces


def get_local_ip() -> Optional[str]:
    """디버거 호스트로 사용할 로컬 IP를 반환합니다."""
    return find_local_ip(list_interfaces())
