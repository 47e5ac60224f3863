"""Subset-sum helpers for splitting and sizing word groups."""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple


def subset_sums(lengths: Sequence[int]) -> Set[int]:
    """Every total reachable by a (possibly empty) sub-multiset of ``lengths``."""

    reachable = 1
    for length in lengths:
        reachable |= reachable << length
    return {total for total in range(reachable.bit_length()) if reachable >> total & 1}


def region_sizes_feasible(sizes: Sequence[int], lengths: Sequence[int]) -> bool:
    """Necessary condition for tiling free regions with the remaining words.

    Each region must be fillable by a subset of the word lengths; the empty
    subset only matches an empty region.
    """

    if sum(sizes) != sum(lengths):
        return False
    reachable = subset_sums(lengths)
    return all(size in reachable for size in sizes if size)


def partition_words(words: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split ``words`` into two groups whose letter counts are as even as possible.

    Classic 0/1 subset-sum tabulation: ``table[i][j]`` is true when some
    subset of the first ``i`` words has exactly ``j`` letters. The target is
    half the total, rounded down. When the target itself is unreachable the
    closest reachable total below it is used, so the split always exists.
    The chosen subset is recovered by walking the table backwards.
    """

    lengths = [len(word) for word in words]
    target = sum(lengths) // 2
    count = len(words)

    table = [[False] * (target + 1) for _ in range(count + 1)]
    for i in range(count + 1):
        table[i][0] = True
    for i in range(1, count + 1):
        size = lengths[i - 1]
        for j in range(1, target + 1):
            table[i][j] = table[i - 1][j]
            if j >= size and table[i - 1][j - size]:
                table[i][j] = True

    best = max(j for j in range(target + 1) if table[count][j])

    chosen: Set[int] = set()
    j = best
    for i in range(count, 0, -1):
        if j == 0:
            break
        if table[i - 1][j]:
            continue
        chosen.add(i - 1)
        j -= lengths[i - 1]

    left = [words[idx] for idx in sorted(chosen)]
    right = [word for idx, word in enumerate(words) if idx not in chosen]
    return left, right


__all__ = ["subset_sums", "region_sizes_feasible", "partition_words"]
