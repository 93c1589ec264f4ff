"""Sample settings domain shared by the test suite.

Mirrors a typical application settings object: nested sections, an enum, an
optional field, a list and a string-keyed mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Level(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class NetworkSettings:
    host: str = "localhost"
    port: int = 502
    use_ssl: bool = False
    timeout: float = 1.5
    proxy: str | None = None


@dataclass
class UiSettings:
    dark_mode: bool = True
    scale: float = 1.0


@dataclass
class LoggingSettings:
    level: Level = Level.INFO
    file_path: str = "app.log"
    tags: list[str] = field(default_factory=lambda: ["core", "startup"])
    extras: dict[str, str] = field(
        default_factory=lambda: {"RetentionDays": "7", "Rotate": "true"}
    )


@dataclass
class AppSettings:
    network: NetworkSettings = field(default_factory=NetworkSettings)
    ui: UiSettings = field(default_factory=UiSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


# Field names match the documented example: Network/Host/Port, Tags, Extras.
@dataclass
class Endpoint:
    Host: str
    Port: int


@dataclass
class ExampleRoot:
    Network: Endpoint
    Tags: list[str]
    Extras: dict[str, str]


def example_root() -> ExampleRoot:
    return ExampleRoot(
        Network=Endpoint(Host="h", Port=502),
        Tags=["a", "b"],
        Extras={"k1": "v1"},
    )
