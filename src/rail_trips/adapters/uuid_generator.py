"""UUID4 implementation of the id generator port."""

import uuid

from rail_trips.domain.ports.id_generator import IdGenerator


class UuidGenerator(IdGenerator):
    """Generates RFC 4122 version 4 UUID strings."""

    def generate(self) -> str:
        return str(uuid.uuid4())
