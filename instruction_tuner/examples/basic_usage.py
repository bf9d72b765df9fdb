"""Example: Basic usage of the instruction tuner with a function invoker.

This example runs the tuning loop offline by answering every role call with
a plain Python function. Replace ``fake_model`` with your own model call, or
drop the invoker argument to use the OpenAI Agents SDK.
"""

import asyncio
from pathlib import Path

from instruction_tuner import FunctionInvoker, TunerConfig, TuningRunner, TuningTask
from instruction_tuner.types import GenerationSettings

TASK_FILE = Path(__file__).parent / "cv_experiences" / "task.yaml"


def fake_model(role: str, behavioral_prompt: str, call_input: str, settings: GenerationSettings):
    """Answer role calls without a hosted model.

    Replace this implementation with your actual model/system.
    """
    if role == "Producer":
        return {"text": "1. Acme Cloud: Kubernetes migration.\n2. Acme Cloud: CI/CD template."}
    if role == "Evaluator":
        # Reward requests that mention the job more often
        return {"score": min(10.0, 4.0 + call_input.count("job") * 0.5)}
    return {
        "suggested_instruction": (
            "Pick the three experiences that best match the job requirements, "
            "naming the job's technologies explicitly."
        )
    }


async def main():
    """Run tuning with a function invoker."""
    # 1. Load the task
    task = TuningTask.from_yaml(TASK_FILE)

    # 2. Configure the tuner
    config = TunerConfig(iterations=3, output_dir=Path("instruction_tuner_results"))

    # 3. Create and run the tuning runner
    runner = TuningRunner(config, invoker=FunctionInvoker(fake_model), verbose=True)
    result = await runner.run(task)

    # 4. Access the results
    print(f"\nBest score: {result.best_score:.2f}")
    print(f"Best instruction:\n{result.best_instruction}")


if __name__ == "__main__":
    asyncio.run(main())
