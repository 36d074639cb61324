MAX_LEVEL = 4

# Inclusive upper bound of each positive level; anything above the last
# threshold is the top level.
LEVEL_THRESHOLDS = (2, 5, 9)


def activity_level(count: int) -> int:
    """Map a daily activity count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    for level, upper_bound in enumerate(LEVEL_THRESHOLDS, start=1):
        if count <= upper_bound:
            return level
    return MAX_LEVEL
