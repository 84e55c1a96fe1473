import unittest

from autosustain.automation.buff_manager import BuffManager
from autosustain.models import BuffOutcome, BuffPhase, BuffRule, BuffStatus


class _Rule:
    """Mutable condition/action pair recording every action() call."""

    def __init__(self, wanted: bool = True, succeed: bool = True):
        self.wanted = wanted
        self.succeed = succeed
        self.calls = 0

    def condition(self) -> bool:
        return self.wanted

    def action(self) -> bool:
        self.calls += 1
        return self.succeed

    def rule(self, name: str = "overload", priority: int = 0, toggle: bool = False, refresh_window=None) -> BuffRule:
        return BuffRule(
            name=name,
            buff_id=hash(name) % 10000,
            condition=self.condition,
            action=self.action,
            priority=priority,
            toggle=toggle,
            refresh_window=refresh_window,
        )


class BuffManagerTests(unittest.TestCase):
    def test_applies_when_wanted_and_inactive(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule()])
        decisions = manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.APPLIED)
        self.assertEqual(manager.phase("overload"), BuffPhase.ACTIVE)
        self.assertEqual(buff.calls, 1)

    def test_failed_apply_keeps_previous_phase(self) -> None:
        buff = _Rule(succeed=False)
        manager = BuffManager([buff.rule()])
        decisions = manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.FAILED)
        self.assertEqual(manager.phase("overload"), BuffPhase.INACTIVE)
        buff.succeed = True
        manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(manager.phase("overload"), BuffPhase.ACTIVE)
        self.assertEqual(buff.calls, 2)

    def test_refreshes_inside_window(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(refresh_window=30)])
        decisions = manager.evaluate({"overload": BuffStatus(active=True, remaining=5)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.REFRESHED)
        self.assertEqual(manager.phase("overload"), BuffPhase.ACTIVE)
        self.assertEqual(buff.calls, 1)

    def test_failed_refresh_stays_active(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(refresh_window=30)])
        manager.evaluate({"overload": BuffStatus(active=False)})
        buff.succeed = False
        decisions = manager.evaluate({"overload": BuffStatus(active=True, remaining=5)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.FAILED)
        self.assertEqual(manager.phase("overload"), BuffPhase.ACTIVE)
        buff.succeed = True
        decisions = manager.evaluate({"overload": BuffStatus(active=True, remaining=4)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.REFRESHED)
        self.assertEqual(buff.calls, 3)

    def test_no_action_outside_refresh_window(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(refresh_window=30)])
        decisions = manager.evaluate({"overload": BuffStatus(active=True, remaining=120)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.NOOP)
        self.assertEqual(manager.phase("overload"), BuffPhase.ACTIVE)
        self.assertEqual(buff.calls, 0)

    def test_no_refresh_without_window_or_remaining(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(name="a"), buff.rule(name="b", refresh_window=30)])
        manager.evaluate({"a": BuffStatus(active=True, remaining=1), "b": BuffStatus(active=True)})
        self.assertEqual(buff.calls, 0)

    def test_toggle_off_calls_action_exactly_once(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(toggle=True)])
        manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(buff.calls, 1)

        buff.wanted = False
        first = manager.evaluate({"overload": BuffStatus(active=True)})
        # Host has not caught up yet: still reported active
        second = manager.evaluate({"overload": BuffStatus(active=True)})
        manager.evaluate({"overload": BuffStatus(active=False)})

        self.assertEqual(first[0].outcome, BuffOutcome.TOGGLED_OFF)
        self.assertEqual(second[0].outcome, BuffOutcome.NOOP)
        self.assertEqual(buff.calls, 2)
        self.assertEqual(manager.phase("overload"), BuffPhase.INACTIVE)

    def test_condition_flicker_during_toggle_off_does_not_cancel_twice(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(toggle=True, refresh_window=30)])
        manager.evaluate({"overload": BuffStatus(active=False)})

        buff.wanted = False
        manager.evaluate({"overload": BuffStatus(active=True)})
        buff.wanted = True
        flicker = manager.evaluate({"overload": BuffStatus(active=True, remaining=5)})
        buff.wanted = False
        manager.evaluate({"overload": BuffStatus(active=True)})

        self.assertEqual(flicker[0].outcome, BuffOutcome.NOOP)
        self.assertEqual(manager.phase("overload"), BuffPhase.TOGGLED_OFF)
        self.assertEqual(buff.calls, 2)

        manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(manager.phase("overload"), BuffPhase.INACTIVE)
        buff.wanted = True
        decisions = manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.APPLIED)
        self.assertEqual(buff.calls, 3)

    def test_non_toggle_rule_never_deactivates(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule(toggle=False)])
        manager.evaluate({"overload": BuffStatus(active=False)})
        buff.wanted = False
        for _ in range(3):
            manager.evaluate({"overload": BuffStatus(active=True)})
        self.assertEqual(buff.calls, 1)
        self.assertEqual(manager.phase("overload"), BuffPhase.EXPIRING)
        manager.evaluate({"overload": BuffStatus(active=False)})
        self.assertEqual(manager.phase("overload"), BuffPhase.INACTIVE)

    def test_rules_evaluated_highest_priority_first(self) -> None:
        order: list[str] = []

        def make(name: str, priority: int) -> BuffRule:
            return BuffRule(
                name=name,
                buff_id=priority,
                condition=lambda: True,
                action=lambda: order.append(name) or True,
                priority=priority,
            )

        manager = BuffManager([make("low", 1), make("high", 10), make("mid", 5)])
        manager.evaluate({})
        self.assertEqual(order, ["high", "mid", "low"])

    def test_lower_priority_rules_are_not_suppressed(self) -> None:
        high, low = _Rule(), _Rule()
        manager = BuffManager([high.rule("high", priority=2), low.rule("low", priority=1)])
        manager.evaluate({})
        self.assertEqual((high.calls, low.calls), (1, 1))

    def test_raising_callbacks_are_treated_as_false(self) -> None:
        def boom() -> bool:
            raise RuntimeError("host gone")

        rule = BuffRule(name="x", buff_id=1, condition=lambda: True, action=boom)
        manager = BuffManager([rule])
        decisions = manager.evaluate({"x": BuffStatus(active=False)})
        self.assertEqual(decisions[0].outcome, BuffOutcome.FAILED)

    def test_collect_statuses_defaults_missing_to_inactive(self) -> None:
        buff = _Rule()
        manager = BuffManager([buff.rule("a"), buff.rule("b")])
        statuses = manager.collect_statuses(lambda buff_id: None)
        self.assertEqual(statuses, {"a": BuffStatus(), "b": BuffStatus()})


if __name__ == "__main__":
    unittest.main()
