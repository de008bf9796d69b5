import logging

from .base import BatchCommand

logger = logging.getLogger(__name__)


class OptionCommand(BatchCommand):
    def apply_or_remove_option_dependency(self, is_option_dependency_to_be_removed: bool) -> None:
        if not self.has_selected_parameters("option dependence"):
            return

        requested = not is_option_dependency_to_be_removed

        for parameter in self.iter_selected_parameters():
            if parameter.is_option_dependent == requested:
                logger.info(
                    "Parameter %s was already %soption dependent",
                    self.name_of(parameter),
                    "" if requested else "not ",
                )
                continue

            self.stager.update(parameter, is_option_dependent=requested)
            logger.info(
                "Parameter %s made %soption dependent",
                self.name_of(parameter),
                "" if requested else "not ",
            )
