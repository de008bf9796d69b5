from dataclasses import dataclass
from typing import Dict

import pytest

from cdp_batch_editor.arguments import CommandArguments
from cdp_batch_editor.filters import FilterService
from cdp_batch_editor.model import (
    ActualFiniteStateList,
    Category,
    DomainOfExpertise,
    ElementDefinition,
    ElementUsage,
    EngineeringModel,
    Iteration,
    MeasurementScale,
    ModelSnapshot,
    Option,
    Parameter,
    ParameterOverride,
    ParameterSubscription,
    ParameterSubscriptionValueSet,
    ParameterSwitchKind,
    ParameterType,
    ParameterTypeKind,
    ParameterValueSet,
    ReferenceDataLibrary,
    SiteDirectory,
)
from cdp_batch_editor.session import SnapshotSession
from cdp_batch_editor.session.service import SessionService

MODEL_SHORT_NAME = "SPC"


@dataclass
class SampleModel:
    snapshot: ModelSnapshot
    domains: Dict[str, DomainOfExpertise]
    scales: Dict[str, MeasurementScale]
    parameter_types: Dict[str, ParameterType]
    categories: Dict[str, Category]
    iteration: Iteration
    elements: Dict[str, ElementDefinition]

    def parameter(self, element_short_name: str, type_short_name: str) -> Parameter:
        type_iid = self.parameter_types[type_short_name].iid
        element = self.elements[element_short_name]
        return next(p for p in element.parameters if p.parameter_type == type_iid)


def value_set(manual="-", computed="-", reference="-", switch=ParameterSwitchKind.MANUAL) -> ParameterValueSet:
    return ParameterValueSet(manual=[manual], computed=[computed], reference=[reference], value_switch=switch)


def build_sample_model() -> SampleModel:
    """
    SAT uses BUS, which uses BAT; RW is a root of its own.

    SAT (SYS)  usage bus -> BUS
    BUS (THE)  m kg, l m (subscribed by MEC), pos compound; usage batt -> BAT with a P_mean override
    BAT (THE)  "Generic Equipment Battery": P_mean, h cm "abc", loc, mode (MEC)
    RW  (MEC)  m kg with a reference value, d m
    """
    domains = {name: DomainOfExpertise(short_name=name, name=name) for name in ("SYS", "THE", "MEC", "PWR", "CONF")}
    scales = {name: MeasurementScale(short_name=name, name=name) for name in ("m", "mm", "cm", "kg", "g", "W")}
    categories = {name: Category(short_name=name, name=name) for name in ("Equipment", "Structure")}

    def quantity(short_name, possible, default):
        return ParameterType(
            short_name=short_name,
            name=short_name,
            kind=ParameterTypeKind.QUANTITY_KIND,
            possible_scales=[scales[s].iid for s in possible],
            default_scale=scales[default].iid,
        )

    parameter_types = {
        "m": quantity("m", ["kg", "g"], "kg"),
        "l": quantity("l", ["m", "mm", "cm"], "mm"),
        "h": quantity("h", ["m", "mm", "cm"], "mm"),
        "d": quantity("d", ["m", "mm", "cm"], "mm"),
        "wid": quantity("wid", ["m", "mm", "cm"], "mm"),
        "P_mean": quantity("P_mean", ["W"], "W"),
        "P_duty_cyc": ParameterType(short_name="P_duty_cyc", name="duty cycle"),
        "loc": ParameterType(short_name="loc", name="location"),
        "mode": ParameterType(short_name="mode", name="mode"),
        "pos": ParameterType(
            short_name="pos", name="position", kind=ParameterTypeKind.COMPOUND, number_of_components=3
        ),
    }

    rdl = ReferenceDataLibrary(
        short_name="GenericRDL",
        name="Generic RDL",
        scales=list(scales.values()),
        parameter_types=list(parameter_types.values()),
        categories=list(categories.values()),
    )
    site_directory = SiteDirectory(domains=list(domains.values()), reference_data_libraries=[rdl])

    def parameter(type_short_name, owner, scale=None, **kwargs):
        kwargs.setdefault("value_sets", [value_set()])
        return Parameter(
            parameter_type=parameter_types[type_short_name].iid,
            owner=domains[owner].iid,
            scale=scales[scale].iid if scale else None,
            **kwargs,
        )

    bat_p_mean = parameter("P_mean", "THE", "W")
    bat = ElementDefinition(
        short_name="BAT",
        name="Generic Equipment Battery",
        owner=domains["THE"].iid,
        categories=[categories["Equipment"].iid],
        parameters=[
            bat_p_mean,
            parameter("h", "THE", "cm", value_sets=[value_set(manual="abc")]),
            parameter("loc", "THE"),
            parameter("mode", "MEC"),
        ],
    )

    bus = ElementDefinition(
        short_name="BUS",
        name="Bus",
        owner=domains["THE"].iid,
        categories=[categories["Structure"].iid],
        parameters=[
            parameter("m", "THE", "kg", value_sets=[value_set(manual="120")]),
            parameter(
                "l", "THE", "m",
                value_sets=[value_set(manual="2", computed="1.5")],
                subscriptions=[
                    ParameterSubscription(
                        owner=domains["MEC"].iid,
                        value_sets=[ParameterSubscriptionValueSet(manual=["3"])],
                    )
                ],
            ),
            parameter(
                "pos", "MEC",
                value_sets=[
                    ParameterValueSet(
                        manual=["-", "5", "-"],
                        computed=["-", "-", "-"],
                        reference=["1", "2", "-"],
                        published=["-", "-", "-"],
                        value_switch=ParameterSwitchKind.REFERENCE,
                    )
                ],
            ),
        ],
        contained_elements=[
            ElementUsage(
                short_name="batt",
                name="battery",
                owner=domains["THE"].iid,
                element_definition=bat.iid,
                parameter_overrides=[
                    ParameterOverride(
                        parameter=bat_p_mean.iid,
                        parameter_type=parameter_types["P_mean"].iid,
                        owner=domains["THE"].iid,
                        scale=scales["W"].iid,
                        value_sets=[value_set()],
                        subscriptions=[
                            ParameterSubscription(
                                owner=domains["MEC"].iid,
                                value_sets=[ParameterSubscriptionValueSet()],
                            )
                        ],
                    )
                ],
            )
        ],
    )

    sat = ElementDefinition(
        short_name="SAT",
        name="Satellite",
        owner=domains["SYS"].iid,
        contained_elements=[
            ElementUsage(short_name="bus", owner=domains["SYS"].iid, element_definition=bus.iid),
        ],
    )

    rw = ElementDefinition(
        short_name="RW",
        name="Reaction Wheel",
        owner=domains["MEC"].iid,
        categories=[categories["Equipment"].iid],
        parameters=[
            parameter(
                "m", "MEC", "kg",
                value_sets=[value_set(reference="5555", switch=ParameterSwitchKind.REFERENCE)],
            ),
            parameter("d", "MEC", "m", value_sets=[value_set(manual="0.25")]),
        ],
    )

    iteration = Iteration(
        iteration_number=1,
        elements=[sat, bus, bat, rw],
        options=[Option(short_name="nominal")],
        actual_finite_state_lists=[ActualFiniteStateList(short_name="PowerModes", owner=domains["SYS"].iid)],
    )
    model = EngineeringModel(short_name=MODEL_SHORT_NAME, name="Spacecraft", iterations=[iteration])

    return SampleModel(
        snapshot=ModelSnapshot(site_directory=site_directory, engineering_models=[model]),
        domains=domains,
        scales=scales,
        parameter_types=parameter_types,
        categories=categories,
        iteration=iteration,
        elements={e.short_name: e for e in iteration.elements},
    )


def open_service(sample: SampleModel, **arguments) -> SessionService:
    arguments.setdefault("engineering_model", MODEL_SHORT_NAME)
    command_arguments = CommandArguments(**arguments)
    session = SnapshotSession(sample.snapshot)
    filter_service = FilterService(command_arguments, session.cache)
    service = SessionService(command_arguments, filter_service, session)
    assert service.open()
    return service


@pytest.fixture
def sample() -> SampleModel:
    """A fresh in-memory model for each test."""
    return build_sample_model()


@pytest.fixture
def make_service(sample):
    def factory(**arguments) -> SessionService:
        return open_service(sample, **arguments)
    return factory


@pytest.fixture
def make_command(make_service):
    """Builds an opened batch command of the given class from keyword arguments."""
    def factory(command_class, **arguments):
        service = make_service(**arguments)
        return command_class(service.arguments, service, service.filter_service)
    return factory
