import pytest

from cqrs import contracts
from cqrs.builder import Builder
from cqrs.buses import Cached, Evented, Transaction
from cqrs.dispatcher import Dispatcher
from cqrs.shared_kernel.events import Event, Invalidated
from cqrs.shared_kernel.exceptions import NotACommand, NotAQuery, NotRunnable

from fakes import commands
from fakes.events import Created, Fizzed, Fizzing, Shipped, Widget
from fakes.events.foo import Bar
from fakes.models import WidgetModel
from fakes.queries import CachedUsers, Users


class CachedEventedUsers(CachedUsers, contracts.Eventable):
    pass


def test_commands_are_wrapped_in_a_fixed_order(dispatcher, connection):
    builder = dispatcher.dispatch(commands.Omni)

    assert isinstance(builder, Builder)
    chain = builder.runnable
    assert isinstance(chain, Evented)
    assert isinstance(chain.runnable, Transaction)
    assert isinstance(chain.runnable.runnable, Cached)
    assert isinstance(chain.runnable.runnable.runnable, commands.Omni)


def test_queries_are_wrapped_in_a_fixed_order(dispatcher):
    chain = dispatcher.dispatch(CachedEventedUsers).runnable

    assert isinstance(chain, Evented)
    assert isinstance(chain.runnable, Cached)
    assert isinstance(chain.runnable.runnable, CachedEventedUsers)


def test_plain_commands_and_queries_are_not_decorated(dispatcher):
    assert isinstance(dispatcher.command(commands.Foo).runnable, commands.Foo)
    assert isinstance(dispatcher.query(Users).runnable, Users)


def test_bare_runnables_are_returned_as_is(dispatcher):
    plain = commands.Plain()

    assert dispatcher.dispatch(plain) is plain


def test_dotted_class_names_are_resolved(dispatcher):
    builder = dispatcher.dispatch("fakes.commands.Foo")

    assert isinstance(builder.runnable, commands.Foo)


def test_unknown_class_names_raise(dispatcher):
    with pytest.raises(LookupError):
        dispatcher.dispatch("fakes.commands.Missing")


def test_non_runnables_are_rejected(dispatcher):
    with pytest.raises(NotRunnable) as exc:
        dispatcher.dispatch(commands.NotRunnable)

    assert str(exc.value) == "fakes.commands.NotRunnable must be an instance of cqrs.contracts.Runnable."
    assert isinstance(exc.value, TypeError)


def test_command_rejects_queries(dispatcher):
    with pytest.raises(NotACommand, match="must be an instance of cqrs.contracts.Command"):
        dispatcher.command(Users)


def test_query_rejects_commands(dispatcher):
    with pytest.raises(NotAQuery, match="must be an instance of cqrs.contracts.Query"):
        dispatcher.query(commands.Foo)


def test_dispatched_runnables_use_the_dispatcher(dispatcher):
    builder = dispatcher.command(commands.Foo)

    assert builder.runnable.dispatcher() is dispatcher


def test_make_uses_the_configured_container(container):
    assert Dispatcher.make().container is container


def test_command_make_returns_a_builder_with_arguments():
    assert commands.Foo.make({"result": "made"}).run() == "made"


def test_omni_command_runs_every_decorator(dispatcher, connection, fired):
    events = fired(Event)

    assert dispatcher.command(commands.Omni).color("red").run() == {"id": 1}

    assert [type(event) for event in events] == [Fizzing, Invalidated, Fizzed]
    assert events[0].color == "red"
    assert events[1].tags == ["omni", "users"]
    assert events[2].id == 1
    assert (connection.commits, connection.rollbacks) == (1, 0)


def test_progressive_names_fire_until_halted(dispatcher, bus):
    calls = []
    bus.subscribe("fakes.events.Widget.Creating", lambda event, payload: calls.append(event) or "halt")
    bus.subscribe("fakes.events.Widget.Creating", lambda event, payload: calls.append(event))

    responses = dispatcher.creating(WidgetModel("gear"))

    assert responses == ["halt"]
    assert len(calls) == 1
    assert isinstance(calls[0], Widget.Creating)
    assert calls[0].event() == "fakes.events.Widget.Creating"
    assert calls[0].name == "gear"


def test_other_names_fire_every_listener(dispatcher, bus):
    bus.subscribe("fakes.events.Widget.Created", lambda event, payload: "one")
    bus.subscribe(Created, lambda event, payload: "two")

    assert dispatcher.created(WidgetModel()) == ["one", "two"]


def test_trigger_uses_the_namespace_fallback(dispatcher, fired):
    events = fired("fakes.events.Widget.Created")

    dispatcher.trigger("created", WidgetModel())

    assert type(events[0]) is Created
    assert events[0].event() == "fakes.events.Widget.Created"


def test_trigger_resolves_snake_case_event_modules(dispatcher, fired):
    events = fired("fakes.events.Foo.Bar")

    dispatcher.bar(commands.Foo())

    assert type(events[0]) is Bar


def test_unknown_events_fall_back_to_a_generic_event(dispatcher, fired):
    events = fired("fakes.events.Foo.Archived")
    subject = commands.Foo()

    dispatcher.archived(subject)

    assert type(events[0]) is Event
    assert events[0].event() == "fakes.events.Foo.Archived"
    assert events[0].payload is subject


def test_default_event_class():
    assert Dispatcher.default_event_class("app.commands.users.Create", "created") == "app.events.Created"
    assert Dispatcher.default_event_class("app.queries.FindUsers", "querying") == "app.events.Querying"
    assert Dispatcher.default_event_class("app.User", "saved") == "app.events.Saved"


def test_normalize_event_class():
    assert Dispatcher.normalize_event_class("app.models.UserModel", "app.events.Creating") == "app.events.User.Creating"
    assert Dispatcher.normalize_event_class("app.queries.FindUsersQuery", "app.events.Querying") == "app.events.FindUsers.Querying"
    assert Dispatcher.normalize_event_class("app.User", "app.events.Saved") == "app.events.User.Saved"


def test_event_and_until_pass_through_to_the_bus(dispatcher, bus):
    bus.subscribe("orders.shipped", lambda event, payload: payload)

    assert dispatcher.event("orders.shipped", {"id": 1}) == [{"id": 1}]
    assert dispatcher.until("orders.shipped", {"id": 2}) == [{"id": 2}]


def test_extra_attributes_reach_the_event_class(dispatcher, fired):
    events = fired(Shipped)
    widget = WidgetModel("gear")

    dispatcher.shipped(widget, "ups")

    assert type(events[0]) is Shipped
    assert events[0].carrier == "ups"
    assert events[0].name == "gear"


def test_generic_events_keep_only_the_subject(dispatcher, fired):
    events = fired("fakes.events.Foo.Archived")
    subject = commands.Foo()

    dispatcher.archived(subject, "extra")

    assert events[0].payload is subject
    assert events[0].properties() == {"event": "fakes.events.Foo.Archived", "payload": subject}
