"""
Shell API Records

Typed views over the organisation, user and device records returned by the
Shell API, plus the flattened ReportRow written to the report.
Any field may be missing from the API payload, so every one is Optional.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

PLACEHOLDER = 'N/A'


def present_or_placeholder(value: Any) -> str:
    """Render a field value, substituting 'N/A' for missing or empty values."""
    if value is None or value == '':
        return PLACEHOLDER
    return str(value)


def _as_dict(data: Any) -> Dict:
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class Organisation:
    id: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Organisation":
        data = _as_dict(data)
        return cls(id=data.get('id'), domain=data.get('domain'))


@dataclass(frozen=True)
class Device:
    id: Optional[str] = None
    ip: Optional[str] = None
    ua: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Device":
        data = _as_dict(data)
        return cls(id=data.get('id'), ip=data.get('ip'), ua=data.get('ua'))


@dataclass(frozen=True)
class User:
    """
    A user within an organisation.

    `email` is lifted out of the nested `info` object; `devs` is None when the
    API omitted the device list entirely.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    devs: Optional[List[Device]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        data = _as_dict(data)
        info = _as_dict(data.get('info'))
        raw_devs = data.get('devs')
        devs = None
        if isinstance(raw_devs, list):
            devs = [Device.from_dict(dev) for dev in raw_devs]
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            email=info.get('email'),
            devs=devs,
        )


@dataclass(frozen=True)
class ReportRow:
    """
    One matching device, joined with its user and organisation.

    Field order is the column order of the report.
    """

    orgDomain: str = PLACEHOLDER
    orgId: str = PLACEHOLDER
    userId: str = PLACEHOLDER
    userName: str = PLACEHOLDER
    userEmail: str = PLACEHOLDER
    deviceId: str = PLACEHOLDER
    deviceIp: str = PLACEHOLDER
    appVersion: str = PLACEHOLDER

    @classmethod
    def build(cls, organisation: Organisation, user: User, device: Device) -> "ReportRow":
        """Flatten an (organisation, user, device) triple into a row."""
        return cls(
            orgDomain=present_or_placeholder(organisation.domain),
            orgId=present_or_placeholder(organisation.id),
            userId=present_or_placeholder(user.id),
            userName=present_or_placeholder(user.name),
            userEmail=present_or_placeholder(user.email),
            deviceId=present_or_placeholder(device.id),
            deviceIp=present_or_placeholder(device.ip),
            appVersion=present_or_placeholder(device.ua),
        )

    def values(self) -> List[str]:
        return [getattr(self, name) for name in REPORT_FIELDS]


REPORT_FIELDS = [f.name for f in fields(ReportRow)]
