"""Save detailed tuning report to file."""

from pathlib import Path

import aiofiles

from instruction_tuner.formatting import preview
from instruction_tuner.types import TuningResult, TuningTask


async def save_tuning_report(
    result: TuningResult,
    task: TuningTask,
    output_dir: str,
) -> Path:
    """
    Save detailed tuning report to file.

    Args:
        result: Tuning result
        task: Task that was tuned
        output_dir: Directory to save the report

    Returns:
        Path to saved report file
    """
    report_file = Path(output_dir) / "tuning_report.txt"
    report_file.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    lines.append("INSTRUCTION TUNING REPORT\n")
    lines.append("=" * 70 + "\n\n")
    lines.append(f"Task: {task.name}\n")
    lines.append(f"Reference provided: {'yes' if task.reference and task.reference.strip() else 'no'}\n")
    lines.append(f"Best Score: {result.best_score:.2f}\n")
    lines.append(f"Improvement: {result.improvement:+.2f}\n")
    lines.append(f"Total Time: {result.total_time_seconds:.1f}s\n\n")

    lines.append("=" * 70 + "\n")
    lines.append("ITERATIONS\n")
    lines.append("=" * 70 + "\n")
    lines.append(f"{'#':>3}  {'Score':>5}  {'Temp':>4}  {'Time':>6}  Instruction\n")
    for it in result.iterations:
        lines.append(
            f"{it.iteration:>3}  {it.score:5.2f}  {it.settings.temperature:4.2f}  "
            f"{it.duration_seconds:5.1f}s  {preview(it.instruction, 80)}\n"
        )

    lines.append(
        f"\nScore progression: {', '.join(f'{s:.2f}' for s in result.score_progression)}\n"
    )

    lines.append("\n" + "=" * 70 + "\n")
    lines.append("INITIAL INSTRUCTION:\n")
    lines.append("=" * 70 + "\n")
    lines.append(result.initial_instruction)
    lines.append("\n\n")

    lines.append("=" * 70 + "\n")
    lines.append("BEST INSTRUCTION:\n")
    lines.append("=" * 70 + "\n")
    lines.append(result.best_instruction)
    lines.append("\n\n")

    lines.append("=" * 70 + "\n")
    lines.append("NEXT SUGGESTED INSTRUCTION:\n")
    lines.append("=" * 70 + "\n")
    lines.append(result.final_instruction)
    lines.append("\n")

    async with aiofiles.open(report_file, "w") as f:
        await f.write("".join(lines))

    print(f"\nDetailed report saved to: {report_file}")
    return report_file
