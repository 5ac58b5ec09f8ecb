"""
Reference data service.

The body shape map and the occasion list in ``capsulify.core.constants``
are used to resolve names and keys without a query. Run ``verify()`` once
at process start so a drift between those constants and the database
stops the process instead of writing wrong ids.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from capsulify.core.constants import BODY_SHAPES, MONTHLY_OCCASIONS
from capsulify.core.exceptions import ReferenceDataMismatchError
from capsulify.database.session import persistence_scope
from capsulify.repositories import reference as reference_repo

logger = logging.getLogger(__name__)


def diff_reference_table(table: str, expected: Dict[int, str], actual: Dict[int, str]) -> List[str]:
    """
    Describe every difference between two id -> value maps.

    Returns:
        Human-readable problems, empty when the maps are equal
    """
    problems = []
    for ref_id, value in sorted(expected.items()):
        if ref_id not in actual:
            problems.append(f"{table}: id {ref_id} ({value!r}) missing from database")
        elif actual[ref_id] != value:
            problems.append(f"{table}: id {ref_id} is {actual[ref_id]!r} in database, expected {value!r}")
    for ref_id in sorted(set(actual) - set(expected)):
        problems.append(f"{table}: id {ref_id} ({actual[ref_id]!r}) unknown to the application")
    return problems


class ReferenceDataService:
    """Checks the in-process reference constants against the database."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def verify(self) -> None:
        """
        Compare body shapes and monthly occasions with their tables.

        Raises:
            ReferenceDataMismatchError: Any id is missing, extra, or differs
            OperationFailedError: The tables could not be read
        """
        with persistence_scope("load reference data", self.session_factory) as db:
            body_shapes = reference_repo.load_body_shapes(db)
            occasions = reference_repo.load_monthly_occasions(db)

        problems = diff_reference_table("body_shapes", BODY_SHAPES, body_shapes)
        problems += diff_reference_table(
            "monthly_occasions",
            {occasion.id: occasion.key for occasion in MONTHLY_OCCASIONS},
            occasions,
        )
        if problems:
            for problem in problems:
                logger.error("Reference data mismatch: %s", problem)
            raise ReferenceDataMismatchError(problems)

        logger.info(
            "Reference data verified: %d body shapes, %d occasions",
            len(body_shapes), len(occasions),
        )


def verify_reference_data(session_factory: Optional[sessionmaker] = None) -> None:
    """
    Startup check. Call before serving requests.

    Usage:
        from capsulify.core.logging import configure_logging
        from capsulify.services import verify_reference_data

        configure_logging()
        verify_reference_data()
    """
    ReferenceDataService(session_factory).verify()
