import pytest

from cqrs.buses import Evented
from cqrs.shared_kernel.events import Event

from fakes.commands import Broken, Create, Custom, Eventful, Publish
from fakes.events import Created, Fizzed, Fizzing
from fakes.queries import EventedUsers


def test_default_events_bracket_the_run(dispatcher, fired):
    events = fired(Event)

    widget = dispatcher.command(Create).name("gear").run()

    assert widget.name == "gear"
    assert [event.event() for event in events] == [
        "fakes.events.Create.Creating",
        "fakes.events.Widget.Created",
    ]
    assert isinstance(events[0].payload, Create)
    assert type(events[1]) is Created
    assert events[1].name == "gear"


def test_before_event_can_halt_listeners_but_not_the_run(dispatcher, bus):
    calls = []
    bus.subscribe("fakes.events.Create.Creating", lambda event, payload: "stop")
    bus.subscribe("fakes.events.Create.Creating", lambda event, payload: calls.append(event))

    assert dispatcher.command(Create).run().name == "widget"
    assert calls == []


def test_unmatched_names_use_executing_and_executed(dispatcher, fired):
    events = fired(Event)
    evented = Evented(Eventful(), dispatcher)

    assert evented.resolve_progressive_tense() == "executing"
    assert evented.resolve_past_tense() == "executed"

    dispatcher.command(Eventful).run()

    assert events[0].event() == "fakes.events.Eventful.Executing"
    assert events[1].event().endswith(".Executed")


def test_silenced_runnables_fire_no_events(dispatcher, fired):
    events = fired(Event)

    widget = dispatcher.command(Create).silently()

    assert widget.name == "widget"
    assert events == []


def test_evented_silently_runs_without_events(dispatcher, fired):
    events = fired(Event)
    evented = Evented(Create(), dispatcher)

    assert evented.silently().name == "widget"
    assert events == []


def test_aborted_runs_fire_only_the_before_event(dispatcher, connection, fired):
    events = fired(Event)

    assert dispatcher.command(Publish).run() is True

    assert [event.event() for event in events] == ["fakes.events.Publish.Publishing"]
    assert (connection.commits, connection.rollbacks) == (0, 1)


def test_errors_skip_the_after_event(dispatcher, fired):
    events = fired(Event)

    with pytest.raises(ValueError, match="nope"):
        dispatcher.command(Broken).run()

    assert len(events) == 1


def test_custom_event_suppliers(dispatcher, fired):
    events = fired(Fizzing, Fizzed)

    dispatcher.command(Custom).color("red").run()

    assert type(events[0]) is Fizzing
    assert events[0].event() == "fakes.events.Fizzing"
    assert events[0].color == "red"
    assert type(events[1]) is Fizzed
    assert events[1].event() == "fakes.events.Fizzed"
    assert events[1].custom is True


def test_unknown_supplied_names_fire_generic_events(dispatcher, fired):
    class Renamed(Create):
        def before_event(self, arguments):
            return "nowhere.events.Renaming"

    events = fired("nowhere.events.Renaming")

    Evented(Renamed(), dispatcher).run()

    assert type(events[0]) is Event
    assert events[0].event() == "nowhere.events.Renaming"


def test_evented_queries_fire_around_get(dispatcher, fired):
    events = fired(Event)

    rows = dispatcher.query(EventedUsers).get()

    assert len(rows) == 2
    assert events[0].event() == "fakes.events.EventedUsers.Executing"
    assert len(events) == 2


def test_fluent_calls_return_the_decorator(dispatcher):
    command = Create()
    evented = Evented(command, dispatcher)

    assert evented.arguments({"name": "gear"}) is evented
    assert evented.abort() is evented
    assert command.aborted() is True
