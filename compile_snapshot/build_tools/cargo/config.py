"""Configuration for the Cargo build tool."""

from collections.abc import Sequence

from pydantic import BaseModel


class CargoConfig(BaseModel):
    """Configuration for the Cargo build tool."""

    cargo: str = "cargo"
    offline: bool = False
    # Appended to every build and run invocation (e.g. "--locked")
    extra_args: Sequence[str] = ()
