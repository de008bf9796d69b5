import logging
from typing import List, Optional

from cdp_batch_editor.arguments import CommandArguments
from cdp_batch_editor.filters import FilterService
from cdp_batch_editor.model import (
    DomainOfExpertise,
    EngineeringModel,
    Iteration,
    ReferenceDataLibrary,
    SiteDirectory,
)

from .cache import ThingCache
from .store import Session, iteration_of
from .transaction import ThingTransaction, TransactionStager

logger = logging.getLogger(__name__)


class SessionService:
    """
    Owns the opened session for one run: the selected iteration, the site
    directory, the cache and the ordered list of staged transactions.
    """

    def __init__(self, arguments: CommandArguments, filter_service: FilterService, session: Session):
        self.arguments = arguments
        self.filter_service = filter_service
        self.session = session
        self.transactions: List[ThingTransaction] = []
        self.site_directory: Optional[SiteDirectory] = None
        self.engineering_model: Optional[EngineeringModel] = None
        self.iteration: Optional[Iteration] = None
        self.domain_of_expertise: Optional[DomainOfExpertise] = None
        self.stager = TransactionStager(self.transactions, self.cache)

    @property
    def cache(self) -> ThingCache:
        return self.session.cache

    def open(self) -> bool:
        snapshot = self.session.open()
        self.site_directory = snapshot.site_directory

        if not self.set_properties(snapshot):
            return False

        self.filter_service.process_filters(self.iteration, self.site_directory.domains)
        return True

    def set_properties(self, snapshot) -> bool:
        self.engineering_model = snapshot.model_by_short_name(self.arguments.engineering_model)
        if self.engineering_model is None:
            logger.warning("No Engineering Model found with short name %s", self.arguments.engineering_model)
            return False

        self.iteration = iteration_of(self.engineering_model, self.arguments.iteration)
        if self.iteration is None:
            logger.warning(
                "No iteration %s found in Engineering Model %s",
                self.arguments.iteration if self.arguments.iteration is not None else "",
                self.engineering_model.short_name,
            )
            return False

        domains = self.site_directory.domains
        if self.arguments.domain_of_expertise:
            self.domain_of_expertise = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)
        elif domains:
            self.domain_of_expertise = domains[0]

        logger.info(
            "Opened %s iteration %d as %s",
            self.engineering_model.short_name,
            self.iteration.iteration_number,
            self.domain_of_expertise.short_name if self.domain_of_expertise else "<no domain>",
        )
        return True

    def reference_data_libraries(self) -> List[ReferenceDataLibrary]:
        """Libraries the iteration requires, or every site library when none is declared."""
        libraries = self.site_directory.reference_data_libraries
        if self.iteration is not None and self.iteration.required_rdls:
            return [rdl for rdl in libraries if rdl.iid in self.iteration.required_rdls]
        return list(libraries)

    def save(self) -> None:
        if not self.transactions:
            logger.info("No change to persist")
        elif self.arguments.dry_run:
            logger.info("DryRun option is set, %d change(s) have not been saved", len(self.transactions))
        else:
            logger.info("Persisting (%d) changes in progress", len(self.transactions))
            self.session.write(self.transactions)
            logger.info("Persisting done")

    def close(self) -> None:
        self.session.close()
        logger.info("Session has been closed")

    def close_and_save(self) -> None:
        self.save()
        self.close()
