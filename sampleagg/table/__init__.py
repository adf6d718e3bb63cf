"""Host-side building blocks around the weighted-sample adapter.

Quick Reference:
    TableConfig: Capacity, seed, field kinds and memory budget
    WeightedSampleEntry: One table cell with memory accounting
    WeightedSampleTable: Keyed cells sharing one swappable random source
    WeightedSampleResults: Display read-out of merged encoded samples
"""

from sampleagg.table.config import TableConfig
from sampleagg.table.entry import WeightedSampleEntry
from sampleagg.table.results import WeightedSampleResults
from sampleagg.table.table import WeightedSampleTable

__all__ = [
    "TableConfig",
    "WeightedSampleEntry",
    "WeightedSampleResults",
    "WeightedSampleTable",
]
