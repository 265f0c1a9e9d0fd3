"""
Classic Bloom filter identities relating capacity (n), bits (m),
hash count (k) and false positive rate (p).

Every function is pure; callers are responsible for clamping results to the
ranges a filter accepts.
"""
import math

MIN_ERROR_RATE = 1e-11
MAX_ERROR_RATE = 1.0

# Past this many probes a filter mostly burns CPU without lowering p.
MAX_HASH_COUNT = 128

LN2 = math.log(2)
LN2_SQUARED = math.log(2) * math.log(2)


def error_rate(elem_count: int, bit_count: int, hash_count: int) -> float:
    """
    False positive probability after elem_count insertions:
      p = (1 - e^(-k*n/m))^k
    """
    return (1.0 - math.exp(-hash_count * elem_count / bit_count)) ** hash_count


def bits_for_target(elem_count: int, fp_rate: float) -> int:
    """Bits needed to hold elem_count elements at the given false positive rate."""
    return math.ceil(elem_count * (-math.log(fp_rate) / LN2_SQUARED))


def elems_for_target(bit_count: int, fp_rate: float) -> int:
    """
    Elements bit_count bits can hold at the given false positive rate.
    May be 0 (e.g. for p == 1.0 or tiny bit counts).
    """
    neg_log = -math.log(fp_rate)
    if neg_log <= 0.0:
        return 0
    return int(bit_count * (LN2_SQUARED / neg_log))


def hash_count_for_optimal(elem_count: int, bit_count: int) -> int:
    """Optimal number of probes, k = ceil(ln2 * m / n). elem_count must be positive."""
    return math.ceil(LN2 * bit_count / elem_count)
