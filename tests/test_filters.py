from cdp_batch_editor.model import ElementUsage

from conftest import open_service


def filtered_short_names(service):
    return sorted(
        e.short_name for e in service.iteration.elements if service.filter_service.is_filtered_in(e)
    )


class TestSubtreeFilter:
    def test_no_filter_selects_every_element_definition(self, make_service):
        service = make_service()
        assert filtered_short_names(service) == ["BAT", "BUS", "RW", "SAT"]

    def test_subtree_from_top(self, make_service, sample):
        service = make_service(element_definition="SAT")
        expected = {sample.elements[name].iid for name in ("SAT", "BUS", "BAT")}
        assert service.filter_service.filtered_element_definitions == expected

    def test_subtree_from_middle(self, make_service):
        service = make_service(element_definition="BUS")
        assert filtered_short_names(service) == ["BAT", "BUS"]

    def test_cycle_terminates(self, sample):
        sample.elements["BAT"].contained_elements.append(
            ElementUsage(short_name="loop", owner=sample.domains["THE"].iid, element_definition=sample.elements["SAT"].iid)
        )
        service = open_service(sample, element_definition="BUS")
        assert filtered_short_names(service) == ["BAT", "BUS", "SAT"]

    def test_unknown_root_selects_nothing(self, make_service, caplog):
        service = make_service(element_definition="NOPE")

        assert service.filter_service.filtered_element_definitions == set()
        assert filtered_short_names(service) == []
        assert all(service.filter_service.is_filtered_in_or_filter_is_empty(e) for e in service.iteration.elements)
        assert "NOPE" in caplog.text


class TestCategoryAndOwnerFilters:
    def test_categories(self, make_service):
        service = make_service(filtered_categories="Equipment")
        assert filtered_short_names(service) == ["BAT", "RW"]

    def test_category_filter_within_subtree(self, make_service):
        service = make_service(element_definition="SAT", filtered_categories="Equipment")
        assert filtered_short_names(service) == ["BAT"]

    def test_excluded_owners_win_over_included(self, make_service, sample):
        service = make_service(included_owners="THE, MEC", excluded_owners="MEC")

        assert service.filter_service.included_owners == {sample.domains["THE"].iid}
        assert filtered_short_names(service) == ["BAT", "BUS"]

    def test_every_domain_included_by_default(self, make_service, sample):
        service = make_service()
        assert service.filter_service.included_owners == {d.iid for d in sample.domains.values()}


class TestParameterFilter:
    def test_any_parameter_when_none_selected(self, make_service, sample):
        service = make_service()
        assert service.filter_service.is_parameter_specified_or_any(sample.parameter("BUS", "l"))

    def test_only_selected_parameters(self, make_service, sample):
        service = make_service(selected_parameters="m")

        assert service.filter_service.is_parameter_specified_or_any(sample.parameter("BUS", "m"))
        assert not service.filter_service.is_parameter_specified_or_any(sample.parameter("BUS", "l"))
