"""
Performance benchmarks for the payload encoders and the rotation engine.
"""

import random
import time
import statistics
from typing import Tuple

from scanbench import (
    encode_data_matrix,
    encode_weight_barcode,
    encode_gs1,
    encode_from_field_config,
    corrupt,
    RotationController,
    propose_datamatrix_items,
)
from scanbench.constants import DEMO_GTINS
from scanbench.rotation import ManualTimer


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)  # Convert to ms

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def run_benchmarks():
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("ScanBench Benchmarks")
    print("=" * 60)
    print()

    rng = random.Random(0)
    dm_payload = encode_data_matrix(DEMO_GTINS[0], "type1", rng).payload

    cases = [
        ("DataMatrix type1", lambda: encode_data_matrix(DEMO_GTINS[0], "type1", rng)),
        ("DataMatrix type2", lambda: encode_data_matrix(DEMO_GTINS[1], "type2", rng)),
        ("Weight 77", lambda: encode_weight_barcode("77", "12345", 1500)),
        ("Weight 49", lambda: encode_weight_barcode("49", "12345", 1500, 10)),
        ("Weight 22", lambda: encode_weight_barcode("22", "12345", 1500)),
        ("GS1 piece", lambda: encode_gs1("12345", "piece", quantity=12.45, discount=10, rng=rng)),
        ("GS1 weight", lambda: encode_gs1("12345", "weight", weight=1500)),
        ("Field config", lambda: encode_from_field_config(
            "code128_19_weight", {"plu": "12345", "discount": "10", "weight": "1500"})),
        ("Corrupt random", lambda: corrupt(dm_payload, "random", rng)),
    ]

    print("Encoders:")
    print("-" * 60)

    for name, func in cases:
        mean, min_t, max_t = benchmark(func, iterations=1000)
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Rotation:")
    print("-" * 60)

    items = propose_datamatrix_items(DEMO_GTINS).items
    controller = RotationController(timer_factory=ManualTimer, rng=rng)
    controller.start(items)

    mean, min_t, max_t = benchmark(controller.next, iterations=1000)
    print(f"  {'next() incl. replay':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    mean, min_t, max_t = benchmark(controller.tick, iterations=1000)
    print(f"  {'tick()':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    controller.stop()
    print()


if __name__ == "__main__":
    run_benchmarks()
