"""Reports package for saving tuning results."""

from instruction_tuner.reports.display_results import display_results
from instruction_tuner.reports.save_best_instruction import save_best_instruction
from instruction_tuner.reports.save_history_json import save_history_json
from instruction_tuner.reports.save_tuning_report import save_tuning_report

__all__ = [
    "display_results",
    "save_best_instruction",
    "save_history_json",
    "save_tuning_report",
]
