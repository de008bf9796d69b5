import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional

from cdp_batch_editor.model import (
    ElementDefinition,
    Parameter,
    ParameterGroup,
    ParameterSubscription,
    ParameterSubscriptionValueSet,
    ParameterValueSet,
)
from cdp_batch_editor.session.service import SessionService

logger = logging.getLogger(__name__)

HEADERS = [
    "EngineeringModel",
    "ElementDefinition",
    "ElementDefinition.ShortName",
    "DomainOfExpertise",
    "ParameterSubscription.Owner",
    "Category",
    "ParameterGroup",
    "ReferenceDataLibrary",
    "Parameter",
    "UserFriendlyShortName",
    "ActualFiniteState.ShortName",
    "Option.ShortName",
    "ActualValue",
    "Published",
    "MeasurementScale",
    "ParameterSwitchKind",
    "COMPUTED",
    "MANUAL",
    "REFERENCE",
    "Formula",
]


class ReportGenerator:
    """Writes the element definitions, parameters and subscriptions of the iteration to a CSV file."""

    def __init__(self, session_service: SessionService):
        self.session_service = session_service

    @property
    def cache(self):
        return self.session_service.cache

    def report_path(self) -> Path:
        model_short_name = self.session_service.engineering_model.short_name
        return Path(self.session_service.arguments.report_dir) / f"{model_short_name}_parameters_report.csv"

    def parameters_to_csv(self) -> Optional[Path]:
        path = self.report_path()
        logger.info("Report on parameters (%s) building in progress", path)

        try:
            with path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, delimiter=";", quoting=csv.QUOTE_ALL)
                writer.writerow(HEADERS)

                for element_definition in sorted(self.session_service.iteration.elements, key=lambda e: e.short_name):
                    writer.writerow(self._element_row(element_definition))

                    for parameter in sorted(
                        element_definition.parameters, key=lambda p: self.cache.short_name(p.parameter_type)
                    ):
                        for value_set in parameter.value_sets:
                            writer.writerow(self._parameter_row(element_definition, parameter, value_set))

                        for subscription in sorted(parameter.subscriptions, key=lambda s: self.cache.short_name(s.owner)):
                            for value_set in subscription.value_sets:
                                writer.writerow(
                                    self._subscription_row(element_definition, parameter, subscription, value_set)
                                )
        except OSError as exc:
            logger.error("Cannot write the report %s: %s", path, exc)
            return None

        logger.info("Done building the report located at: %s", path.resolve())
        return path

    def _base_row(self, element_definition: ElementDefinition) -> Dict[str, str]:
        row = dict.fromkeys(HEADERS, "")
        row["EngineeringModel"] = self.session_service.engineering_model.short_name
        row["ElementDefinition"] = element_definition.name
        row["ElementDefinition.ShortName"] = element_definition.short_name
        row["Category"] = ", ".join(sorted(self.cache.short_name(iid) for iid in element_definition.categories))
        return row

    def _element_row(self, element_definition: ElementDefinition) -> List[str]:
        row = self._base_row(element_definition)
        row["DomainOfExpertise"] = self.cache.short_name(element_definition.owner)
        return list(row.values())

    def _fill_parameter_columns(self, row: Dict[str, str], parameter: Parameter, value_set: ParameterValueSet) -> None:
        parameter_type = self.cache.parameter_type_of(parameter)
        rdl = self.cache.get(parameter_type.container) if parameter_type is not None else None
        group = self.cache.get_typed(parameter.group, ParameterGroup)

        row["ParameterGroup"] = group.name if group is not None else ""
        row["ReferenceDataLibrary"] = getattr(rdl, "short_name", "") if rdl is not None else ""
        row["Parameter"] = parameter_type.name if parameter_type is not None else ""
        row["UserFriendlyShortName"] = parameter_type.short_name if parameter_type is not None else ""
        row["ActualFiniteState.ShortName"] = self.cache.short_name(value_set.actual_state)
        row["Option.ShortName"] = self.cache.short_name(value_set.actual_option)
        row["ActualValue"] = value_set.actual_value[0] if value_set.actual_value else ""
        row["MeasurementScale"] = self.cache.short_name(parameter.scale)
        row["ParameterSwitchKind"] = value_set.value_switch.value
        row["COMPUTED"] = "|".join(value_set.computed)
        row["MANUAL"] = "|".join(value_set.manual)
        row["REFERENCE"] = "|".join(value_set.reference)

    def _parameter_row(
        self, element_definition: ElementDefinition, parameter: Parameter, value_set: ParameterValueSet
    ) -> List[str]:
        row = self._base_row(element_definition)
        self._fill_parameter_columns(row, parameter, value_set)
        row["DomainOfExpertise"] = self.cache.short_name(parameter.owner)
        row["Published"] = value_set.published[0] if value_set.published else ""
        row["Formula"] = "|".join(f'"{formula}"' for formula in value_set.formula)
        return list(row.values())

    def _subscription_row(
        self,
        element_definition: ElementDefinition,
        parameter: Parameter,
        subscription: ParameterSubscription,
        value_set: ParameterSubscriptionValueSet,
    ) -> List[str]:
        row = self._base_row(element_definition)
        self._fill_parameter_columns(row, parameter, value_set)
        row["DomainOfExpertise"] = self.cache.short_name(parameter.owner)
        row["ParameterSubscription.Owner"] = self.cache.short_name(subscription.owner)
        return list(row.values())
