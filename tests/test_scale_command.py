from cdp_batch_editor.commands import ScaleCommand
from cdp_batch_editor.model import Parameter, ParameterValueSet


class TestAssignMeasurementScale:
    def test_length_scale_converts_values(self, make_command, sample):
        command = make_command(ScaleCommand, selected_parameters="l", scale="mm")

        command.assign_measurement_scale()

        clones = [t.clone for t in command.session_service.transactions]
        assert len(clones) == 3
        assert clones[0].manual == ["2000"]
        assert clones[-1].iid == sample.parameter("BUS", "l").iid
        assert clones[-1].scale == sample.scales["mm"].iid

    def test_non_length_scale_is_relabelled(self, make_command, sample):
        command = make_command(ScaleCommand, selected_parameters="m", scale="g")

        command.assign_measurement_scale()

        clones = [t.clone for t in command.session_service.transactions]
        assert [c.iid for c in clones] == [sample.parameter("BUS", "m").iid, sample.parameter("RW", "m").iid]
        assert all(isinstance(c, Parameter) and c.scale == sample.scales["g"].iid for c in clones)

    def test_scale_not_allowed_for_parameter_type(self, make_command):
        command = make_command(ScaleCommand, selected_parameters="l", scale="kg")
        command.assign_measurement_scale()
        assert command.session_service.transactions == []

    def test_unknown_scale(self, make_command, caplog):
        command = make_command(ScaleCommand, selected_parameters="l", scale="furlong")

        command.assign_measurement_scale()

        assert command.session_service.transactions == []
        assert "--scale" in caplog.text

    def test_parameter_already_in_scale(self, make_command):
        command = make_command(ScaleCommand, selected_parameters="m", scale="kg")
        command.assign_measurement_scale()
        assert command.session_service.transactions == []


class TestStandardizeDimensions:
    def test_converts_dimensions_to_millimetre(self, make_command, sample):
        command = make_command(ScaleCommand)

        command.standardize_dimensions_in_millimetre()

        clones = [t.clone for t in command.session_service.transactions]
        # BAT.h holds "abc" and is left alone; BUS.l stages 3 clones, RW.d stages 2
        assert [c.iid for c in clones if isinstance(c, Parameter)] == [
            sample.parameter("BUS", "l").iid,
            sample.parameter("RW", "d").iid,
        ]
        assert len(clones) == 5
        assert isinstance(clones[3], ParameterValueSet)
        assert clones[3].manual == ["250"]
        assert clones[4].scale == sample.scales["mm"].iid
        assert sample.parameter("BAT", "h").scale == sample.scales["cm"].iid

    def test_respects_element_filter(self, make_command, sample):
        command = make_command(ScaleCommand, element_definition="RW")

        command.standardize_dimensions_in_millimetre()

        assert [t.clone.iid for t in command.session_service.transactions][-1] == sample.parameter("RW", "d").iid
        assert len(command.session_service.transactions) == 2
