import logging
from typing import TYPE_CHECKING, Iterable, Set

from cdp_batch_editor.arguments import CommandArguments
from cdp_batch_editor.model import DomainOfExpertise, ElementDefinition, Iteration, ParameterBase

if TYPE_CHECKING:
    from cdp_batch_editor.session.cache import ThingCache

logger = logging.getLogger(__name__)


class FilterService:
    """
    Decides which element definitions and parameters an action applies to.

    ``process_filters`` computes the in-scope element definitions, category
    short names and owners once per run; the predicates below only read
    those results.
    """

    def __init__(self, arguments: CommandArguments, cache: "ThingCache"):
        self.arguments = arguments
        self.cache = cache
        # iids of the element definitions in scope
        self.filtered_element_definitions: Set[str] = set()
        self.filtered_category_short_names: Set[str] = set()
        # iids of the domains of expertise in scope
        self.included_owners: Set[str] = set()

    def process_filters(self, iteration: Iteration, all_domains: Iterable[DomainOfExpertise]) -> None:
        all_domains = list(all_domains)

        self.filtered_category_short_names = {
            name.strip() for name in self.arguments.filtered_categories if name.strip()
        }

        self.filtered_element_definitions = set()
        top_of_subtree_short_name = (self.arguments.element_definition or "").strip()

        if not top_of_subtree_short_name:
            self.filtered_element_definitions.update(e.iid for e in iteration.elements)
        else:
            top_of_subtree = iteration.element_by_short_name(top_of_subtree_short_name)
            if top_of_subtree is None:
                logger.warning(
                    "Cannot find Element Definition with short name %s for --element-definition",
                    top_of_subtree_short_name,
                )
            else:
                self.collect_subtree(top_of_subtree, self.filtered_element_definitions)

        if self.arguments.included_owners:
            included = [d for d in all_domains if d.short_name in self.arguments.included_owners]
        else:
            included = all_domains
        self.included_owners = {d.iid for d in included}

        if self.arguments.excluded_owners:
            self.included_owners -= {d.iid for d in all_domains if d.short_name in self.arguments.excluded_owners}

        logger.info(
            "Included owners filter: %s",
            ", ".join(sorted(d.short_name for d in all_domains if d.iid in self.included_owners)),
        )

    def collect_subtree(self, top_of_subtree: ElementDefinition, collected: Set[str]) -> None:
        """Depth-first collection of a definition and every definition used below it."""
        if top_of_subtree.iid in collected:
            return
        collected.add(top_of_subtree.iid)

        for element_usage in top_of_subtree.contained_elements:
            definition = self.cache.get_typed(element_usage.element_definition, ElementDefinition)
            if definition is None:
                logger.warning(
                    "Element usage %s refers to an unknown element definition %s",
                    element_usage.short_name,
                    element_usage.element_definition,
                )
                continue
            self.collect_subtree(definition, collected)

    def is_filtered_in(self, element_definition: ElementDefinition) -> bool:
        return (
            element_definition.iid in self.filtered_element_definitions
            and self.is_member_of_selected_category(element_definition)
            and element_definition.owner in self.included_owners
        )

    def is_filtered_in_or_filter_is_empty(self, element_definition: ElementDefinition) -> bool:
        return not self.filtered_element_definitions or self.is_filtered_in(element_definition)

    def is_member_of_selected_category(self, element_definition: ElementDefinition) -> bool:
        if not self.filtered_category_short_names:
            return True
        element_categories = {self.cache.short_name(iid) for iid in element_definition.categories}
        return bool(self.filtered_category_short_names & element_categories)

    def is_parameter_specified_or_any(self, parameter: ParameterBase) -> bool:
        selected = self.arguments.selected_parameters
        return not selected or self.cache.short_name(parameter.parameter_type) in selected
