import logging

from cdp_batch_editor.conversion import (
    CONVERSION_FACTORS_TO_MILLIMETRE,
    ScaleConverter,
    length_conversion_factor,
)
from cdp_batch_editor.model import MeasurementScale, ParameterType

from .base import BatchCommand

logger = logging.getLogger(__name__)

DIMENSION_PARAMETER_SHORT_NAMES = ("d", "h", "l", "wid")
MILLIMETRE = "mm"


class ScaleCommand(BatchCommand):
    def __init__(self, arguments, session_service, filter_service):
        super().__init__(arguments, session_service, filter_service)
        self.converter = ScaleConverter(session_service.stager, session_service.cache)

    def assign_measurement_scale(self) -> None:
        """
        Assigns the --scale to the selected quantity-kind parameters. Values are
        converted when both scales are length scales with a known factor.
        """
        measurement_scale = self.site_directory.scale_by_short_name(self.arguments.scale)

        if measurement_scale is None:
            logger.warning("Invalid action \"set-scale\": short name of a valid scale must be given in --scale.")
            return

        if not self.has_selected_parameters("set-scale"):
            return

        for element_definition in self.filtered_elements():
            parameters = [
                p for p in element_definition.parameters
                if self.filter_service.is_parameter_specified_or_any(p)
            ]
            for parameter in self.by_parameter_type(parameters):
                parameter_type = self.cache.parameter_type_of(parameter)
                if parameter_type is None or not parameter_type.is_quantity_kind:
                    continue

                self._warn_about_invalid_scale(parameter, parameter_type)

                if parameter_type.short_name not in self.arguments.selected_parameters:
                    continue
                if measurement_scale.iid not in parameter_type.possible_scales or parameter.scale == measurement_scale.iid:
                    continue

                old_scale = self.cache.get_typed(parameter.scale, MeasurementScale)
                factor = (
                    length_conversion_factor(old_scale.short_name, measurement_scale.short_name)
                    if old_scale is not None else None
                )

                if factor is not None:
                    self.converter.convert_parameter(
                        element_definition.short_name, parameter, old_scale, measurement_scale, factor
                    )
                else:
                    self.stager.update(parameter, scale=measurement_scale.iid)
                    logger.info(
                        "Assigned scale \"%s\" to parameter %s",
                        measurement_scale.short_name,
                        self.name_of(parameter),
                    )

    def standardize_dimensions_in_millimetre(self) -> None:
        millimetre = self.site_directory.scale_by_short_name(MILLIMETRE)
        if millimetre is None:
            logger.warning("No measurement scale with short name %s found. Action skipped.", MILLIMETRE)
            return

        elements = sorted(
            (e for e in self.iteration.elements if self.filter_service.is_filtered_in_or_filter_is_empty(e)),
            key=lambda e: e.short_name,
        )

        for element_definition in elements:
            for dimension_short_name in DIMENSION_PARAMETER_SHORT_NAMES:
                parameter = next(
                    (
                        p for p in element_definition.parameters
                        if self.filter_service.is_parameter_specified_or_any(p)
                        and self.cache.short_name(p.parameter_type) == dimension_short_name
                    ),
                    None,
                )
                if parameter is None:
                    continue

                parameter_type = self.cache.parameter_type_of(parameter)
                if (
                    parameter_type is None
                    or not parameter_type.is_quantity_kind
                    or millimetre.iid not in parameter_type.possible_scales
                    or parameter.scale == millimetre.iid
                ):
                    continue

                old_scale = self.cache.get_typed(parameter.scale, MeasurementScale)
                if old_scale is None or old_scale.short_name not in CONVERSION_FACTORS_TO_MILLIMETRE:
                    logger.warning(
                        "No conversion factor to %s for parameter %s with scale %s",
                        MILLIMETRE,
                        self.name_of(parameter),
                        old_scale.short_name if old_scale else "<none>",
                    )
                    continue

                self.converter.convert_parameter(
                    element_definition.short_name,
                    parameter,
                    old_scale,
                    millimetre,
                    CONVERSION_FACTORS_TO_MILLIMETRE[old_scale.short_name],
                )

    def _warn_about_invalid_scale(self, parameter, parameter_type: ParameterType) -> None:
        possible = ", ".join(sorted(self.cache.short_name(iid) for iid in parameter_type.possible_scales))
        if parameter.scale is None:
            logger.warning(
                "No measurement scale assigned to parameter %s: should be one of %s",
                self.name_of(parameter),
                possible,
            )
        elif parameter.scale not in parameter_type.possible_scales:
            logger.warning(
                "Invalid measurement scale %s assigned to parameter %s: should be one of %s",
                self.cache.short_name(parameter.scale),
                self.name_of(parameter),
                possible,
            )
