"""Save the run history to a JSON file."""

import json
from pathlib import Path

import aiofiles

from instruction_tuner.types import TuningResult


async def save_history_json(result: TuningResult, output_dir: str) -> Path:
    """
    Export the session's run records with their scores to JSON.

    The export is write-only; history is never reloaded from it.

    Args:
        result: Tuning result containing the run history
        output_dir: Directory to save the JSON file

    Returns:
        Path to saved JSON file
    """
    history_file = Path(output_dir) / "run_history.json"
    history_file.parent.mkdir(parents=True, exist_ok=True)

    history_data = {
        "task_name": result.task_name,
        "runs": [
            {"run": i, **record.model_dump()}
            for i, record in enumerate(result.history, 1)
        ],
        "best": {
            "instruction": result.best_instruction,
            "score": result.best_score,
        },
        "summary": {
            "total_runs": len(result.history),
            "score_progression": result.score_progression,
            "final_instruction": result.final_instruction,
        },
    }

    async with aiofiles.open(history_file, "w") as f:
        await f.write(json.dumps(history_data, indent=2, ensure_ascii=False))

    print(f"Run history saved to: {history_file}")
    return history_file
