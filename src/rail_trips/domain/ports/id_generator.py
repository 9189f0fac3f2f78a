"""Identifier generator port."""

from typing import Protocol


class IdGenerator(Protocol):
    """Port for generating globally unique trip identifiers."""

    def generate(self) -> str: ...
