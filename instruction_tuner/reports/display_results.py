"""Display tuning results to console."""

from instruction_tuner.formatting import preview
from instruction_tuner.types import TuningResult


def display_results(result: TuningResult) -> None:
    """
    Display tuning results to console.

    Args:
        result: Tuning result containing the best instruction and per-iteration scores
    """
    print("\n" + "=" * 70)
    print("TUNING COMPLETE!")
    print("=" * 70)
    print(f"\nBest Score: {result.best_score:.2f}")
    print(f"Improvement over first iteration: {result.improvement:+.2f}")
    print(f"Iterations: {len(result.iterations)}")
    print(f"Total Time: {result.total_time_seconds:.1f} seconds")
    print("\nIterations:")
    for it in result.iterations:
        marker = " *" if it.iteration == result.best_iteration else ""
        print(f"  {it.iteration:>2}. {it.score:5.2f}{marker}  {preview(it.instruction, 60)}")
