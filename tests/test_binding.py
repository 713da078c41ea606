"""Tests for fieldcheck.binding — explicit submit-trigger registration."""

from fieldcheck.binding import SubmitBinding, SubmitEvent, bind_submit_trigger
from fieldcheck.engine import ValidationEngine
from fieldcheck.fields import StaticFieldSource
from fieldcheck.markup import HtmlFieldSource


class FakeButton:
    def __init__(self) -> None:
        self.handlers: list[SubmitBinding] = []

    def on_click(self, handler: SubmitBinding) -> None:
        self.handlers.append(handler)

    def click(self) -> SubmitEvent:
        event = SubmitEvent()
        for handler in self.handlers:
            handler(event)
        return event


def _source() -> StaticFieldSource:
    source = StaticFieldSource()
    source.add("card", rules="required,creditCard", value="", containers=("checkout",))
    return source


class TestBindSubmitTrigger:
    def test_nothing_bound_until_called(self) -> None:
        button = FakeButton()
        ValidationEngine(_source())
        assert button.handlers == []

    def test_registers_on_trigger(self) -> None:
        button = FakeButton()
        binding = bind_submit_trigger(ValidationEngine(_source()), "checkout", button)
        assert button.handlers == [binding]

    def test_failure_prevents_default(self) -> None:
        engine = ValidationEngine(_source())
        button = FakeButton()
        bind_submit_trigger(engine, "checkout", button)

        event = button.click()
        assert event.default_prevented is True
        assert [m.message for m in engine.board.markers] == ["Required"]

    def test_success_lets_submit_proceed(self) -> None:
        source = _source()
        source.set_value("card", "4567456745674567")
        button = FakeButton()
        bind_submit_trigger(ValidationEngine(source), "checkout", button)
        assert button.click().default_prevented is False

    def test_binding_without_trigger(self) -> None:
        binding = bind_submit_trigger(ValidationEngine(_source()), "checkout")
        event = SubmitEvent()
        assert binding(event) is False
        assert event.default_prevented is True

    def test_clear_prior_errors(self) -> None:
        engine = ValidationEngine(_source())
        binding = bind_submit_trigger(engine, "checkout", clear_prior_errors=True)
        binding(SubmitEvent())
        binding(SubmitEvent())
        assert len(engine.board) == 1

    def test_bind_from_markup(self) -> None:
        page = (
            '<div id="pay"><input id="cvv" data-validate="cvv" value="12"></div>'
            '<button id="buy" data-submitter="pay">Buy</button>'
        )
        source = HtmlFieldSource(page)
        engine = ValidationEngine(source)
        bindings = [
            bind_submit_trigger(engine, trigger.container_id)
            for trigger in source.submit_triggers()
        ]
        event = SubmitEvent()
        assert bindings[0](event) is False
        assert event.default_prevented is True
        assert engine.board.markers[0].message == "Invalid CVV"
