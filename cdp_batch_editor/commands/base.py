import logging
from typing import Iterable, Iterator, List

from cdp_batch_editor.arguments import CommandArguments
from cdp_batch_editor.filters import FilterService
from cdp_batch_editor.model import ElementDefinition, ParameterBase
from cdp_batch_editor.session.service import SessionService

logger = logging.getLogger(__name__)


class BatchCommand:
    """Shared plumbing of the batch commands: arguments, session, filters and the transaction stager."""

    def __init__(self, arguments: CommandArguments, session_service: SessionService, filter_service: FilterService):
        self.arguments = arguments
        self.session_service = session_service
        self.filter_service = filter_service

    @property
    def cache(self):
        return self.session_service.cache

    @property
    def stager(self):
        return self.session_service.stager

    @property
    def site_directory(self):
        return self.session_service.site_directory

    @property
    def iteration(self):
        return self.session_service.iteration

    def filtered_elements(self) -> List[ElementDefinition]:
        """In-scope element definitions ordered by short name."""
        return sorted(
            (e for e in self.iteration.elements if self.filter_service.is_filtered_in(e)),
            key=lambda e: e.short_name,
        )

    def by_parameter_type(self, parameters: Iterable[ParameterBase]) -> List[ParameterBase]:
        return sorted(parameters, key=lambda p: self.cache.short_name(p.parameter_type))

    def is_selected(self, parameter: ParameterBase) -> bool:
        """True when the parameter type is explicitly listed in --parameters."""
        return self.cache.short_name(parameter.parameter_type) in self.arguments.selected_parameters

    def iter_selected_parameters(self) -> Iterator[ParameterBase]:
        for element_definition in self.filtered_elements():
            for parameter in self.by_parameter_type(element_definition.parameters):
                if self.is_selected(parameter):
                    yield parameter

    def name_of(self, thing) -> str:
        return self.cache.user_friendly_short_name(thing)

    def has_selected_parameters(self, action: str) -> bool:
        if not self.arguments.selected_parameters:
            logger.warning("No --parameters given. Action %s skipped.", action)
            return False
        return True
