"""
Summary statistics over a scored case collection.

Pure aggregation: nothing here mutates the cases or performs I/O.
"""

from collections import Counter
from typing import Sequence

from foreclosure_types.schemas import PipelineStatistics, ScoredCase


def compute_statistics(cases: Sequence[ScoredCase]) -> PipelineStatistics:
    """
    Aggregate grade distribution, coverage and docket-posture counts.

    Args:
        cases: Scored cases (any order)

    Returns:
        PipelineStatistics; all zeros for an empty collection
    """
    stats = PipelineStatistics(total=len(cases))
    if not cases:
        return stats

    assessed_values = []
    cities: Counter = Counter()
    for scored in cases:
        stats.by_grade[scored.lead.grade.value] += 1

        address = scored.address
        if address is not None and address.found:
            stats.with_address += 1
        if address is not None and address.in_target_county:
            stats.in_target_county += 1
        if address is not None and address.city:
            cities[address.city.upper()] += 1

        if scored.docket_available:
            stats.with_docket_data += 1
        else:
            stats.missing_docket_data += 1
        if scored.enrichment_error:
            stats.enrichment_failures += 1
        if scored.assessed_value is not None:
            stats.enriched_cases += 1
            assessed_values.append(scored.assessed_value)

        docket = scored.docket
        if not docket.has_defendant_response:
            stats.no_defendant_response += 1
        if not docket.has_defendant_attorney:
            stats.no_defendant_attorney += 1
        if docket.has_default_motion:
            stats.has_default_motion += 1
        if docket.has_defendant_attorney:
            stats.has_defendant_attorney += 1
        if docket.has_conciliation:
            stats.has_conciliation += 1

    stats.avg_lead_score = round(sum(c.score for c in cases) / len(cases))
    stats.avg_days_open = round(sum(c.case.days_open for c in cases) / len(cases))
    if assessed_values:
        stats.avg_assessed_value = round(sum(assessed_values) / len(assessed_values))
    stats.by_city = dict(sorted(cities.items(), key=lambda kv: (-kv[1], kv[0])))
    return stats
