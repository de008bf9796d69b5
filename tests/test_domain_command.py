from cdp_batch_editor.commands import DomainCommand


def staged_owners(command):
    return {t.clone.iid: t.clone.owner for t in command.session_service.transactions}


class TestChangeDomain:
    def test_same_domains_change_nothing(self, make_command, caplog):
        command = make_command(DomainCommand, domain_of_expertise="THE", to_domain_of_expertise="THE")

        command.change_domain()

        assert command.session_service.transactions == []
        assert "same" in caplog.text

    def test_unknown_domain_changes_nothing(self, make_command):
        command = make_command(DomainCommand, domain_of_expertise="THE", to_domain_of_expertise="NOPE")
        command.change_domain()
        assert command.session_service.transactions == []

    def test_moves_element_and_its_owned_parameters(self, make_command, sample):
        command = make_command(
            DomainCommand, domain_of_expertise="MEC", to_domain_of_expertise="SYS", included_owners="MEC"
        )

        command.change_domain()

        rw = sample.elements["RW"]
        assert staged_owners(command) == {
            rw.iid: sample.domains["SYS"].iid,
            sample.parameter("RW", "d").iid: sample.domains["SYS"].iid,
            sample.parameter("RW", "m").iid: sample.domains["SYS"].iid,
        }
        assert rw.owner == sample.domains["MEC"].iid

    def test_covers_usages_overrides_and_subscriptions(self, make_command, sample):
        command = make_command(
            DomainCommand, domain_of_expertise="MEC", to_domain_of_expertise="PWR", filtered_categories="Structure"
        )

        command.change_domain()

        bus_l = sample.parameter("BUS", "l")
        override = sample.elements["BUS"].contained_elements[0].parameter_overrides[0]
        assert set(staged_owners(command)) == {
            sample.parameter("BUS", "pos").iid,
            bus_l.subscriptions[0].iid,
            override.subscriptions[0].iid,
        }

    def test_parameter_filter_restricts_parameters(self, make_command, sample):
        command = make_command(
            DomainCommand,
            domain_of_expertise="THE",
            to_domain_of_expertise="MEC",
            filtered_categories="Structure",
            selected_parameters="m",
        )

        command.change_domain()

        bus = sample.elements["BUS"]
        usage = bus.contained_elements[0]
        assert list(staged_owners(command)) == [
            bus.iid,
            sample.parameter("BUS", "m").iid,
            usage.iid,
            usage.parameter_overrides[0].iid,
        ]


class TestChangeParameterOwnership:
    def test_gives_selected_parameters_to_domain(self, make_command, sample):
        command = make_command(DomainCommand, domain_of_expertise="PWR", selected_parameters="m")

        command.change_parameter_ownership()

        assert staged_owners(command) == {
            sample.parameter("BUS", "m").iid: sample.domains["PWR"].iid,
            sample.parameter("RW", "m").iid: sample.domains["PWR"].iid,
        }

    def test_already_owned_parameters_are_skipped(self, make_command, sample):
        command = make_command(DomainCommand, domain_of_expertise="MEC", selected_parameters="m")
        command.change_parameter_ownership()
        assert list(staged_owners(command)) == [sample.parameter("BUS", "m").iid]

    def test_unknown_domain(self, make_command):
        command = make_command(DomainCommand, domain_of_expertise="NOPE", selected_parameters="m")
        command.change_parameter_ownership()
        assert command.session_service.transactions == []


class TestGenericEquipmentOwnership:
    def test_prescribed_and_element_owners(self, make_command, sample):
        command = make_command(DomainCommand)

        command.set_generic_equipment_ownership()

        assert staged_owners(command) == {
            sample.parameter("BAT", "P_mean").iid: sample.domains["PWR"].iid,
            sample.parameter("BAT", "loc").iid: sample.domains["CONF"].iid,
            sample.parameter("BAT", "mode").iid: sample.domains["THE"].iid,
        }
