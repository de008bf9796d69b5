from cdp_batch_editor.arguments import CommandArguments, CommandEnumeration
from cdp_batch_editor.container import build_app
from cdp_batch_editor.session import SnapshotSession

from conftest import MODEL_SHORT_NAME


def test_build_app_runs_action_and_commits(sample):
    arguments = CommandArguments(
        engineering_model=MODEL_SHORT_NAME,
        command=CommandEnumeration.SUBSCRIBE,
        domain_of_expertise="SYS",
        selected_parameters="m",
    )
    app = build_app(arguments, SnapshotSession(sample.snapshot))

    assert app.run()
    app.stop()

    for element_short_name in ("BUS", "RW"):
        subscriptions = sample.parameter(element_short_name, "m").subscriptions
        assert [s.owner for s in subscriptions] == [sample.domains["SYS"].iid]


def test_filters_share_the_session_cache(sample):
    arguments = CommandArguments(engineering_model=MODEL_SHORT_NAME, element_definition="BUS")
    app = build_app(arguments, SnapshotSession(sample.snapshot))

    assert app.run()

    filter_service = app.session_service.filter_service
    assert filter_service.cache is app.session_service.cache
    assert len(filter_service.filtered_element_definitions) == 2


def test_unknown_model_does_not_run(sample):
    app = build_app(CommandArguments(engineering_model="NOPE"), SnapshotSession(sample.snapshot))

    assert not app.run()
    app.stop()
