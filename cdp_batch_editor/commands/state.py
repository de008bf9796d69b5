import logging

from .base import BatchCommand

logger = logging.getLogger(__name__)


class StateCommand(BatchCommand):
    def apply_or_remove_state_dependency(self, is_state_dependency_to_be_removed: bool) -> None:
        if not self.has_selected_parameters("state dependence"):
            return

        state_list_name = self.arguments.state_list_name
        state_list = self.iteration.state_list_by_short_name(state_list_name)

        if state_list is None:
            logger.warning(
                "Cannot find Actual Finite State List \"%s\". Apply state dependence skipped.",
                state_list_name,
            )
            return

        logger.info(
            "%s state dependency \"%s\"",
            "Removing" if is_state_dependency_to_be_removed else "Applying",
            state_list_name,
        )

        for parameter in self.iter_selected_parameters():
            depends_on_list = parameter.state_dependence == state_list.iid

            if is_state_dependency_to_be_removed and depends_on_list:
                self.stager.update(parameter, state_dependence=None)
                logger.info("State %s removed from Parameter %s", state_list_name, self.name_of(parameter))
            elif not is_state_dependency_to_be_removed and not depends_on_list:
                previous = self.cache.short_name(parameter.state_dependence)
                self.stager.update(parameter, state_dependence=state_list.iid)
                logger.info(
                    "State %s applied to Parameter %s%s",
                    state_list_name,
                    self.name_of(parameter),
                    f", changed from {previous}" if previous else "",
                )
            else:
                logger.info(
                    "State %s was already %s Parameter %s",
                    state_list_name,
                    "removed from" if is_state_dependency_to_be_removed else "applied to",
                    self.name_of(parameter),
                )
