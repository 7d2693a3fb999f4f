# -*- coding: utf-8 -*-
"""
Kiểm tra nhanh thiết bị theo IP: thử http:// rồi https://, trả về kết quả đầu tiên phản hồi.
"""
from __future__ import annotations
import ipaddress
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

PROTOCOLS = ("http", "https")


@dataclass
class PingResult:
    ip_address: str
    reachable: bool
    protocol: Optional[str] = None
    status_code: Optional[int] = None
    latency_ms: Optional[int] = None
    error: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_ip(value: str) -> str:
    text = (value or "").strip()
    try:
        ipaddress.ip_address(text)
    except ValueError:
        raise ValueError(f"Invalid IP address: {value!r}")
    return text


def _host(ip: str) -> str:
    # IPv6 trong URL phải nằm trong []
    return f"[{ip}]" if ipaddress.ip_address(ip).version == 6 else ip


def check_host(ip: str, timeout: Optional[float] = None) -> PingResult:
    ip = validate_ip(ip)
    host = _host(ip)
    timeout = timeout or getattr(settings, "NETWORK_CHECK_TIMEOUT", 5)
    last_error = ""
    for proto in PROTOCOLS:
        started = time.monotonic()
        try:
            # verify=False: thiết bị nội bộ thường dùng chứng chỉ tự ký
            r = requests.get(f"{proto}://{host}", timeout=timeout, verify=False, allow_redirects=False)
        except requests.RequestException as ex:
            last_error = str(ex)
            logger.debug("[network] %s://%s unreachable: %s", proto, host, ex)
            continue
        latency = int((time.monotonic() - started) * 1000)
        return PingResult(ip_address=ip, reachable=True, protocol=proto, status_code=r.status_code, latency_ms=latency)
    return PingResult(ip_address=ip, reachable=False, error=last_error[:500])
