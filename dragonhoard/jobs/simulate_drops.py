"""
Simulate chest drops.

Opens many virtual chests of every rarity and logs how often each element
tier came up next to the configured drop rates. Useful after tuning the
drop tables.
"""

import argparse
import logging
import random
from collections import Counter

from dragonhoard.models.catalog import DROP_RATES, Rarity, element_tier
from dragonhoard.services.tier_resolver import resolve_element

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 10_000


def run_simulation(
    trials: int = DEFAULT_TRIALS,
    seed: int | None = None,
) -> dict[Rarity, dict[int, float]]:
    """
    Sample chest elements for every rarity.

    Args:
        trials: Chests opened per rarity
        seed: Random seed for reproducible runs

    Returns:
        Dict mapping rarity to observed frequency of each element tier
    """
    if trials <= 0:
        raise ValueError(f"trials must be positive, got {trials}")

    rng = random.Random(seed)
    results: dict[Rarity, dict[int, float]] = {}

    for rarity in Rarity:
        counts = Counter(element_tier(resolve_element(rarity, rng)) for _ in range(trials))
        results[rarity] = {tier: counts[tier] / trials for tier in sorted(counts)}

        for tier, expected in sorted(DROP_RATES[rarity].items()):
            logger.info(
                "%s chest tier %d: observed %.3f, configured %.3f",
                rarity.name.title(),
                tier,
                results[rarity].get(tier, 0.0),
                expected,
            )

    return results


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Simulate chest element drops")
    parser.add_argument(
        "--trials",
        type=int,
        default=DEFAULT_TRIALS,
        help=f"Chests opened per rarity (default: {DEFAULT_TRIALS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_simulation(trials=args.trials, seed=args.seed)


if __name__ == "__main__":
    main()
