"""
In-memory handler slots for tests.

FakeSlot stands in for the runtime so model behavior can be tested without
touching real process signal dispositions.
"""

from typing import Any

from trapinfra.exceptions import SlotError
from trapinfra.trap import HandlerSlot


class FakeSlot(HandlerSlot):
    """Slot holding a handler in memory; None is default disposition."""

    def __init__(self, name: str, handler: Any = None, refuse: bool = False) -> None:
        super().__init__(name)
        self.handler = handler
        self.refuse = refuse
        self.installs = 0
        self.resets = 0

    def read(self) -> Any:
        return self.handler

    def install(self, handler: Any) -> None:
        if self.refuse:
            raise SlotError(self.name, "Invalid argument")
        self.installs += 1
        self.handler = handler

    def reset(self) -> None:
        if self.refuse:
            raise SlotError(self.name, "Invalid argument")
        self.resets += 1
        self.handler = None


class FakeSlots:
    """
    Slot factory creating FakeSlots on demand.

    Pre-existing handlers can be seeded before a context first reads them:

        slots = FakeSlots()
        slots.seed("SIGTERM", old_handler)
        ctx = TrapContext(slot_factory=slots)
    """

    def __init__(self, refuse: tuple[str, ...] = ()) -> None:
        self.slots: dict[str, FakeSlot] = {}
        self.refuse = set(refuse)

    def __call__(self, name: str, code: int | None) -> FakeSlot:
        if name not in self.slots:
            self.slots[name] = FakeSlot(name, refuse=name in self.refuse)
        return self.slots[name]

    def seed(self, name: str, handler: Any) -> None:
        self(name, None).handler = handler

    def handler(self, name: str) -> Any:
        slot = self.slots.get(name)
        return slot.handler if slot is not None else None

    def fire(self, name: str, *args: Any) -> None:
        """Invoke the handler a slot holds, as the runtime would."""
        handler = self.handler(name)
        if handler is not None:
            handler(*args)
