"""sampleagg: mergeable weighted-sample aggregation.

Workers each keep a bounded weighted reservoir over their partition of a
stream, encode it, and a coordinator merges the encodings into one sample
distributed as if the whole stream had been sampled centrally.

Example:
    from sampleagg import FloatWeightOps, SeededRandom, WeightedSampleAdapter

    rng = SeededRandom(seed=1)
    a = WeightedSampleAdapter(FloatWeightOps(), max_elems=10, random=rng)
    b = WeightedSampleAdapter(FloatWeightOps(), max_elems=10, random=rng)
    ...
    a.merge(b.encode())
"""

import logging

from sampleagg.adapter import WeightedSampleAdapter
from sampleagg.codec import MalformedEncodingError
from sampleagg.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from sampleagg.randomness import Ownership, RandomHandle, RandomProxy, RandomSource, SeededRandom
from sampleagg.schema import FieldKind, FieldType, TableType
from sampleagg.sketching import WeightedReservoir
from sampleagg.table import (
    TableConfig,
    WeightedSampleEntry,
    WeightedSampleResults,
    WeightedSampleTable,
)
from sampleagg.weights import (
    FloatWeightOps,
    IntWeightOps,
    TimeWeightOps,
    WeightOps,
    weight_ops_for,
)

# Library is silent unless the application opts in.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FieldKind",
    "FieldType",
    "FloatWeightOps",
    "IntWeightOps",
    "MalformedEncodingError",
    "Ownership",
    "RandomHandle",
    "RandomProxy",
    "RandomSource",
    "SeededRandom",
    "TableConfig",
    "TableType",
    "TimeWeightOps",
    "WeightOps",
    "WeightedReservoir",
    "WeightedSampleAdapter",
    "WeightedSampleEntry",
    "WeightedSampleResults",
    "WeightedSampleTable",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
    "weight_ops_for",
]
