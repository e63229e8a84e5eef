"""Event classes resolved by the dispatcher during tests."""
from cqrs.shared_kernel.events import Event


class Fizzing(Event):
    pass


class Fizzed(Event):
    pass


class Created(Event):
    pass


class Widget:
    class Creating(Event):
        pass


class Shipped(Event):
    def __init__(self, payload=None, carrier=None):
        super().__init__(payload)
        self.carrier = carrier
