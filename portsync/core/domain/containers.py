"""
Container inspection models.

Only the part of ``docker inspect`` output needed to work out published
ports is modelled; every other key in the payload is ignored.
"""

from typing import Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PortBinding(BaseModel):
    """One entry of a container's published-port table."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    host_ip: str = Field(default="", alias="HostIp",
                         description="Host interface the port is bound to")
    host_port: str = Field(default="", alias="HostPort",
                           description="Port number on the host")


class NetworkSettings(BaseModel):
    """Network section of an inspected container."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # A port that is exposed but not published maps to null
    ports: Optional[Dict[str, Optional[Tuple[PortBinding, ...]]]] = Field(
        default=None, alias="Ports")


class ContainerRecord(BaseModel):
    """One inspected container."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default="", alias="Id")
    network_settings: Optional[NetworkSettings] = Field(
        default=None, alias="NetworkSettings")

    @property
    def ports(self) -> Dict[str, Tuple[PortBinding, ...]]:
        """Port specification (e.g. ``80/tcp``) to its host bindings."""
        if self.network_settings is None or self.network_settings.ports is None:
            return {}
        return {
            spec: bindings or ()
            for spec, bindings in self.network_settings.ports.items()
        }

    def bindings(self) -> Iterator[PortBinding]:
        """Iterate over every host binding of every port specification."""
        for bindings in self.ports.values():
            yield from bindings
