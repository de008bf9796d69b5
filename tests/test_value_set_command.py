from cdp_batch_editor.commands import ValueSetCommand
from cdp_batch_editor.commands.value_set import movable_components
from cdp_batch_editor.model import ParameterSwitchKind, ParameterValueSet


class TestMovableComponents:
    def test_scalar(self):
        value_set = ParameterValueSet(reference=["5555"], value_switch=ParameterSwitchKind.REFERENCE)
        assert movable_components(value_set, scalar=True) == [0]

    def test_manual_value_already_set(self):
        value_set = ParameterValueSet(manual=["1"], reference=["5555"], value_switch=ParameterSwitchKind.REFERENCE)
        assert movable_components(value_set, scalar=True) == []

    def test_switch_must_be_reference(self):
        value_set = ParameterValueSet(reference=["5555"], value_switch=ParameterSwitchKind.MANUAL)
        assert movable_components(value_set, scalar=True) == []

    def test_compound_checks_every_component(self):
        value_set = ParameterValueSet(
            manual=["-", "-", "7"],
            reference=["1", "-", "3"],
            value_switch=ParameterSwitchKind.REFERENCE,
        )
        assert movable_components(value_set, scalar=False) == [0]


class TestMoveReferenceValuesToManualValues:
    def test_scalar_value_is_moved(self, make_command, sample):
        command = make_command(ValueSetCommand, selected_parameters="m")

        command.move_reference_values_to_manual_values()

        (transaction,) = command.session_service.transactions
        clone = transaction.clone
        assert clone.iid == sample.parameter("RW", "m").value_sets[0].iid
        assert clone.manual == ["5555"]
        assert clone.reference == ["-"]
        assert clone.value_switch == ParameterSwitchKind.MANUAL
        assert sample.parameter("RW", "m").value_sets[0].manual == ["-"]

    def test_compound_value_is_moved(self, make_command):
        command = make_command(ValueSetCommand, selected_parameters="pos")

        command.move_reference_values_to_manual_values()

        (transaction,) = command.session_service.transactions
        assert transaction.clone.manual == ["1", "5", "-"]
        assert transaction.clone.reference == ["-", "2", "-"]

    def test_nothing_to_move(self, make_command):
        command = make_command(ValueSetCommand, selected_parameters="l")
        command.move_reference_values_to_manual_values()
        assert command.session_service.transactions == []
