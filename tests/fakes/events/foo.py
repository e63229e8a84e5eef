from cqrs.shared_kernel.events import Event


class Bar(Event):
    pass
