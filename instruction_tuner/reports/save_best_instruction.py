"""Save the best instruction to file."""

from pathlib import Path

import aiofiles

from instruction_tuner.types import TuningResult


async def save_best_instruction(result: TuningResult, output_dir: str) -> Path:
    """
    Save the best-scoring instruction to file.

    Args:
        result: Tuning result containing the best instruction
        output_dir: Directory to save the instruction

    Returns:
        Path to saved instruction file
    """
    output_file = Path(output_dir) / "best_instruction.md"
    output_file.parent.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(output_file, "w") as f:
        await f.write(result.best_instruction)

    print(f"\nBest instruction saved to: {output_file}")

    print("\n" + "=" * 70)
    print(f"BEST INSTRUCTION (score {result.best_score:.2f}):")
    print("=" * 70)
    print(result.best_instruction)
    print("=" * 70)

    return output_file
