"""Distributed weighted sampling of an access log.

Several workers each sample their shard of an access log, weighting every
URL by its hit count. The coordinator merges the workers' encoded states and
prints the final sample, which is distributed exactly as if one reservoir had
read the whole log.

## Architecture

```
access log (url, hits)
  -> shard by line number
    -> WeightedSampleTable per worker (key = status class)
      -> flush() -> {key: encoded bytes}
        -> coordinator WeightedSampleTable.merge(key, encoded)
          -> WeightedSampleResults.to_dataframe()
```

Run with SA_LOGGING=DEBUG to watch merges and flushes.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

import sampleagg
from sampleagg import TableConfig, WeightedSampleResults, WeightedSampleTable


@dataclass(frozen=True)
class ExampleConfig:
    """Parameters for the example run."""

    workers: int = 4
    lines: int = 20_000
    urls: int = 500
    capacity: int = 8
    seed: int = 42


def access_log(config: ExampleConfig, rng: sampleagg.SeededRandom):
    """Yield (status class, url, hits); low url ids get far more hits."""
    for _ in range(config.lines):
        url_id = rng.unbiased_uniform(config.urls)
        hits = config.urls // (url_id + 1)
        status = "5xx" if rng.unbiased_uniform(20) == 0 else "2xx"
        yield status, f"/page/{url_id}", hits


def run(config: ExampleConfig) -> pd.DataFrame:
    workers = [
        WeightedSampleTable(TableConfig(capacity=config.capacity, seed=config.seed + w))
        for w in range(config.workers)
    ]
    log_rng = sampleagg.SeededRandom(config.seed)
    for line, (status, url, hits) in enumerate(access_log(config, log_rng)):
        workers[line % config.workers].add(status, url, hits)

    coordinator = WeightedSampleTable(TableConfig(capacity=config.capacity, seed=config.seed))
    for worker in workers:
        for status, encoded in worker.flush().items():
            coordinator.merge(status, encoded)

    frames = []
    for status, encoded in coordinator.flush().items():
        results = WeightedSampleResults.from_encoded(encoded, config.capacity)
        df = results.to_dataframe(decode=bytes.decode)
        df["status"] = status
        frames.append(df)
    return pd.concat(frames, ignore_index=True)


if __name__ == "__main__":
    sampleagg.configure_from_env()
    print(run(ExampleConfig()).to_string(index=False))
