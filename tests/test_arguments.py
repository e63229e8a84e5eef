from collections.abc import Mapping
from datetime import date, datetime

import pytest
from pydantic import BaseModel

from cqrs.concerns import Arguments, RulesValidator
from cqrs.shared_kernel.exceptions import (
    InvalidArgument,
    MissingArgument,
    RuleValidationFailed,
    UnsupportedValidator,
    ValidationFailed,
)


class Subject(Arguments):
    pass


def make(**arguments):
    return Subject().arguments(arguments)


def test_arguments_setter_is_fluent_and_replaces():
    subject = Subject()

    assert subject.arguments({"a": 1}) is subject
    subject.arguments([("b", 2)])

    assert subject.arguments() == {"b": 2}


def test_arguments_accept_pydantic_models():
    class Payload(BaseModel):
        user: int
        role: str = "member"

    assert Subject().arguments(Payload(user=1)).arguments() == {"user": 1, "role": "member"}


def test_argument_returns_the_value():
    assert make(user=1).argument("user") == 1


@pytest.mark.parametrize("value", [None, ""])
def test_missing_argument_raises(value):
    with pytest.raises(MissingArgument, match='Argument "user" is required by .*Subject.'):
        make(user=value).argument("user")


def test_option_falls_back_to_the_default():
    subject = make(empty="")

    assert subject.option("role", "member") == "member"
    assert subject.option("empty", "fallback") == "fallback"
    assert subject.option("role", lambda: "resolved") == "resolved"
    assert subject.option("role") is None


def test_dotted_names_read_nested_arguments():
    subject = make(user={"profile": {"name": "Ada"}})

    assert subject.option("user.profile.name") == "Ada"
    assert subject.has_option("user.profile")
    assert not subject.has_option("user.email")


def test_named_function_validators():
    subject = make(callback=print, digits="123", letters="abc")

    assert subject.argument("callback", "callable") is print
    assert subject.argument("digits", "str.isdigit") == "123"

    with pytest.raises(InvalidArgument) as exc:
        subject.argument("letters", "str.isdigit")
    assert str(exc.value) == 'The value for the "letters" argument could not be validated using str.isdigit().'


def test_callable_validators_receive_value_and_name():
    seen = []

    def positive(value, name):
        seen.append(name)
        return value > 0

    subject = make(count=3, negative=-1)

    assert subject.argument("count", positive) == 3
    assert seen == ["count"]
    with pytest.raises(InvalidArgument, match="using the callable"):
        subject.argument("negative", positive)


def test_rule_validators_use_pydantic():
    subject = make(age=21, young=12)

    assert subject.argument("age", {"type": int, "ge": 18}) == 21

    with pytest.raises(RuleValidationFailed) as exc:
        subject.argument("young", {"type": int, "ge": 18})

    assert isinstance(exc.value, ValidationFailed)
    assert exc.value.errors[0]["type"] == "greater_than_equal"
    assert exc.value.details["argument"] == "young"


def test_validator_objects():
    subject = make(age=12)
    validator = Subject.make_validator("age", 12, {"type": int, "ge": 18})

    assert isinstance(validator, RulesValidator)
    with pytest.raises(RuleValidationFailed):
        subject.argument("age", validator)


def test_class_validators_require_the_exact_type():
    now = datetime(2024, 1, 1, 12, 0)
    subject = make(when=now, mapping={"a": 1}, count=True)

    assert subject.argument("when", datetime) is now
    assert subject.argument("when", "datetime.datetime") is now
    assert subject.argument("mapping", Mapping) == {"a": 1}

    with pytest.raises(InvalidArgument, match="must be an instance of datetime.date"):
        subject.argument("when", date)
    with pytest.raises(InvalidArgument, match="must be an instance of builtins.int"):
        subject.argument("count", "int")


def test_unsupported_validators_raise():
    with pytest.raises(UnsupportedValidator):
        make(count=1).argument("count", 42)


def test_options_are_only_validated_when_present():
    subject = make(count="x")

    assert subject.option("missing", None, int) is None
    with pytest.raises(InvalidArgument):
        subject.option("count", None, int)
