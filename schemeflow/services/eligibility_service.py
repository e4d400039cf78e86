"""
Eligibility matching of patients against the scheme catalog
"""
import logging
from typing import Iterable, List, Protocol

from ..models.scheme import EligibilityCriteria, Scheme
from ..models.user import EligibilityCheckResponse, NearMiss

logger = logging.getLogger(__name__)


class PatientAttributes(Protocol):
    """Anything exposing the attributes eligibility depends on"""
    age: int
    income: float
    category: str
    gender: str


class EligibilityMatcher:
    """Filters a scheme catalog against a patient's attributes"""

    # schemes failing at most this many predicate groups are reported as near misses
    NEAR_MISS_MAX_FAILURES = 2

    def match(self, patient: PatientAttributes, catalog: Iterable[Scheme]) -> List[Scheme]:
        """
        Return the schemes the patient qualifies for.

        Args:
            patient: Patient attributes (age, income, category, gender)
            catalog: Scheme definitions to check

        Returns:
            Matching schemes in catalog order
        """
        return [
            scheme for scheme in catalog
            if self.is_eligible(patient, scheme.eligibility_criteria)
        ]

    def is_eligible(self, patient: PatientAttributes, criteria: EligibilityCriteria) -> bool:
        return not self._failures(patient, criteria)

    def failed_conditions(self, patient: PatientAttributes, scheme: Scheme) -> List[str]:
        """
        Explain why a scheme does not match

        Returns:
            One message per failed predicate group, empty when the scheme matches
        """
        return self._failures(patient, scheme.eligibility_criteria)

    def check(self, patient: PatientAttributes, catalog: Iterable[Scheme]) -> EligibilityCheckResponse:
        """Split the catalog into eligible schemes and near misses"""
        eligible_schemes = []
        near_misses = []

        for scheme in catalog:
            failures = self.failed_conditions(patient, scheme)
            if not failures:
                eligible_schemes.append(scheme)
            elif len(failures) <= self.NEAR_MISS_MAX_FAILURES:
                near_misses.append(NearMiss(
                    scheme_id=scheme.id,
                    scheme_name=scheme.name,
                    failed_conditions=failures
                ))

        logger.info(f"Found {len(eligible_schemes)} eligible schemes and {len(near_misses)} near misses")
        return EligibilityCheckResponse(
            eligible_schemes=eligible_schemes,
            near_misses=near_misses
        )

    def _failures(self, patient: PatientAttributes, criteria: EligibilityCriteria) -> List[str]:
        failures = []

        if criteria.age is not None:
            if criteria.age.min is not None and patient.age < criteria.age.min:
                failures.append(f"Age {patient.age} is below the minimum of {criteria.age.min}")
            elif criteria.age.max is not None and patient.age > criteria.age.max:
                failures.append(f"Age {patient.age} is above the maximum of {criteria.age.max}")

        if criteria.income is not None and patient.income > criteria.income.max:
            failures.append(
                f"Income {_amount(patient.income)} exceeds the limit of {_amount(criteria.income.max)}"
            )

        if criteria.category is not None and patient.category not in criteria.category:
            failures.append(
                f"Category '{patient.category}' is not one of: {', '.join(criteria.category) or 'none'}"
            )

        if criteria.gender is not None and patient.gender not in criteria.gender:
            failures.append(
                f"Gender '{patient.gender}' is not one of: {', '.join(criteria.gender) or 'none'}"
            )

        return failures


# Global eligibility matcher instance
eligibility_matcher = EligibilityMatcher()


def match(patient: PatientAttributes, catalog: Iterable[Scheme]) -> List[Scheme]:
    """Return the schemes in ``catalog`` that ``patient`` qualifies for"""
    return eligibility_matcher.match(patient, catalog)


def _amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"
